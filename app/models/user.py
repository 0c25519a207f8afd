"""
app/models/user.py

Purpose: User document model

- Stored record shape (wire keys as persisted in the users document)
- Required fields and age floor
- Attribute name <-> document key mapping
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any

# Attributes a client may set, in document order
USER_FIELDS = ("name", "email", "password", "age", "country", "phone")
REQUIRED_FIELDS = ("name", "email", "password", "country")
MIN_AGE = 18


class User(BaseModel):
    """
    A user record as stored in the collection.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str = Field(alias="nombre")
    email: str = Field(alias="correo")
    password: str = Field(alias="contraseña")
    age: Optional[int] = Field(default=None, alias="edad")
    country: str = Field(alias="pais")
    phone: Optional[str] = Field(default=None, alias="telefono")

    def to_document(self) -> Dict[str, Any]:
        """Document form; unset optional fields are left out."""
        return self.model_dump(by_alias=True, exclude_none=True)


def document_key(field: str) -> str:
    """Returns the document key for a model attribute (e.g. "email" -> "correo")."""
    return User.model_fields[field].alias or field
