"""
Schémas Pydantic pour les appels de cotisation (association et école).
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from alnour.schemas.common import coerce_amount, coerce_date


class AppelCotisation(BaseModel):
    """Ligne d'appel de cotisation des membres."""
    idliste: int
    nrcontact: int
    idcontact: Optional[int] = None
    montantcotisation: Decimal = Decimal("0")
    datereceptioncotisation: Optional[date] = None
    signatureagent: Optional[str] = None
    signaturecotisant: Optional[str] = None

    @field_validator("montantcotisation", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)

    @field_validator("datereceptioncotisation", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_date(v)


class AppelCotisationEcole(BaseModel):
    """Ligne d'appel de cotisation de l'école."""
    idliste: int
    nrcontact: int
    idcontact: Optional[int] = None
    montantcotisation: Decimal = Decimal("0")
    datereceptioncotisation: Optional[date] = None
    signatureagent: Optional[str] = None
    commentaire: Optional[str] = None

    @field_validator("montantcotisation", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)

    @field_validator("datereceptioncotisation", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_date(v)

    @field_validator("commentaire", mode="before")
    @classmethod
    def decode_commentaire(cls, v):
        # Champ binaire côté base, parfois sérialisé en liste d'octets
        if isinstance(v, list):
            return bytes(v).decode("utf-8", errors="replace")
        if isinstance(v, dict) and isinstance(v.get("data"), list):
            return bytes(v["data"]).decode("utf-8", errors="replace")
        return v


class AppelCotisationCreate(BaseModel):
    """Formulaire d'un appel de cotisation."""
    nrcontact: int = Field(..., ge=1, description="Numéro de contact")
    idcontact: Optional[int] = Field(None, ge=1)
    montantcotisation: Decimal = Field(..., ge=0)
    datereceptioncotisation: Optional[date] = None
    signatureagent: str = Field(..., min_length=2, max_length=100)
    signaturecotisant: str = Field(..., min_length=2, max_length=100)


class AppelCotisationEcoleCreate(BaseModel):
    """Formulaire d'un appel de cotisation de l'école."""
    nrcontact: int = Field(..., ge=1, description="Numéro de contact")
    idcontact: Optional[int] = Field(None, ge=1)
    montantcotisation: Decimal = Field(..., ge=0)
    datereceptioncotisation: Optional[date] = None
    signatureagent: str = Field(..., min_length=2, max_length=100)
    commentaire: Optional[str] = Field(None, max_length=1000)
