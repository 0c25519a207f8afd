"""
app/schemas/user.py

Purpose: Request payload schemas for the users API

- Accepts the document keys used by clients (nombre, correo, ...)
- Every field optional at the schema level; presence rules are
  enforced by the user service so they map to the documented 400 errors
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from app.models.user import REQUIRED_FIELDS, USER_FIELDS


class UserFields(BaseModel):
    # Numbers sent for text fields (e.g. telefono: 56123) are kept as text
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: Optional[str] = Field(default=None, alias="nombre")
    email: Optional[str] = Field(default=None, alias="correo")
    password: Optional[str] = Field(default=None, alias="contraseña")
    age: Optional[int] = Field(default=None, alias="edad")
    country: Optional[str] = Field(default=None, alias="pais")
    phone: Optional[str] = Field(default=None, alias="telefono")


class UserCreate(UserFields):
    """
    Payload for POST /usuarios
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "nombre": "Juan Pérez",
                "correo": "juan.perez@example.com",
                "contraseña": "Password1!",
                "edad": 30,
                "pais": "Chile",
                "telefono": "+56-123-456-7890"
            }
        }
    )

    def missing_required(self) -> List[str]:
        """Required attributes that are absent or empty."""
        return [field for field in REQUIRED_FIELDS if not getattr(self, field)]


class UserUpdate(UserFields):
    """
    Payload for PUT /usuarios/{id} (partial patch)
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"nombre": "Ana María López"}}
    )

    def changes(self) -> dict:
        """Attributes carrying a truthy value; everything else is left untouched."""
        return {
            field: getattr(self, field)
            for field in USER_FIELDS
            if getattr(self, field)
        }
