from typing import Optional, Any

class UserRegistryError(Exception):
    """
    Base exception for the user registry application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ValidationError(UserRegistryError):
    """
    Raised when required fields are missing or a value is out of range.
    """
    def __init__(self, message: str = "Campos obligatorios incompletos", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class ConflictError(UserRegistryError):
    """
    Raised when a unique field (email) is already taken.
    """
    def __init__(self, message: str = "El correo ya está registrado", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=400, details=details)

class NotFoundError(UserRegistryError):
    """
    Raised when a requested user does not exist.
    """
    def __init__(self, message: str = "Usuario no encontrado", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class StorageError(UserRegistryError):
    """
    Raised when the document store cannot be read or written.
    """
    def __init__(self, message: str = "Error al procesar el archivo", details: Optional[Any] = None):
        super().__init__(message, code="STORAGE_ERROR", status_code=500, details=details)
