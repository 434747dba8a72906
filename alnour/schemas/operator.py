"""
Schémas Pydantic pour les opérateurs de la console et l'authentification.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from alnour.models.operator import OperatorRole


class OperatorBase(BaseModel):
    """Schéma de base pour les opérateurs."""
    email: EmailStr = Field(..., description="Adresse email de connexion")
    first_name: str = Field(..., min_length=2, max_length=100, description="Prénom")
    last_name: str = Field(..., min_length=2, max_length=100, description="Nom de famille")


class OperatorCreate(OperatorBase):
    """Création d'un opérateur par un administrateur."""
    password: str = Field(..., min_length=6, description="Mot de passe (min 6 caractères)")
    role: OperatorRole = Field(default=OperatorRole.LECTEUR)


class OperatorUpdate(BaseModel):
    """Mise à jour d'un opérateur (rôle, activation, identité)."""
    first_name: Optional[str] = Field(None, min_length=2, max_length=100)
    last_name: Optional[str] = Field(None, min_length=2, max_length=100)
    role: Optional[OperatorRole] = None
    is_active: Optional[bool] = None


class OperatorResponse(BaseModel):
    """Schéma de réponse pour un opérateur."""
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    full_name: str
    role: OperatorRole
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class OperatorLogin(BaseModel):
    """Formulaire de connexion."""
    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=6, description="Mot de passe")


class Token(BaseModel):
    """Schéma pour les tokens JWT."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Durée de validité en secondes")


class RefreshRequest(BaseModel):
    refresh_token: str


class PasswordChange(BaseModel):
    """Schéma pour le changement de mot de passe."""
    current_password: str = Field(..., min_length=6, description="Mot de passe actuel")
    new_password: str = Field(..., min_length=6, description="Nouveau mot de passe")
    confirm_password: str = Field(..., min_length=6, description="Confirmation")

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        if "new_password" in info.data and v != info.data["new_password"]:
            raise ValueError("Les mots de passe ne correspondent pas")
        return v
