"""
Schémas Pydantic pour les contacts (membres, donateurs, agents de recette).
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from alnour.schemas.common import coerce_amount, coerce_date, coerce_flag


ROLE_FLAGS = ("adherent", "membrefondateur", "membrecotisant", "donateur", "agentrecette")


class Contact(BaseModel):
    """Contact tel que renvoyé par l'API REST."""
    idcontact: int
    prenom: str = ""
    nom: str = ""
    alias: Optional[str] = None
    adherent: int = 0
    membrefondateur: int = 0
    membrecotisant: int = 0
    donateur: int = 0
    agentrecette: int = 0
    dateadhesion: Optional[date] = None
    fonction: Optional[str] = None
    telfix: Optional[str] = None
    fax: Optional[str] = None
    mobile: Optional[str] = None
    adresse1: Optional[str] = None
    adresse2: Optional[str] = None
    codepostal: Optional[str] = None
    ville: Optional[str] = None
    pays: Optional[str] = None
    email: Optional[str] = None
    montantcotisation: Decimal = Decimal("0")
    idagentrecetteref: Optional[int] = None

    @field_validator(*ROLE_FLAGS, mode="before")
    @classmethod
    def normalize_flags(cls, v):
        return coerce_flag(v)

    @field_validator("dateadhesion", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_date(v)

    @field_validator("montantcotisation", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)

    @field_validator("idagentrecetteref", mode="before")
    @classmethod
    def empty_reference(cls, v):
        return None if v in ("", 0, "0") else v

    @property
    def full_name(self) -> str:
        return f"{self.prenom} {self.nom}"

    @property
    def is_percepteur(self) -> bool:
        return self.agentrecette == 1

    @property
    def is_cotisant(self) -> bool:
        return self.membrecotisant == 1


class ContactCreate(BaseModel):
    """Formulaire de création / modification d'un contact."""
    prenom: str = Field(..., min_length=2, max_length=100, description="Prénom")
    nom: str = Field(..., min_length=2, max_length=100, description="Nom")
    alias: Optional[str] = Field(None, max_length=100)
    adherent: int = Field(0, ge=0, le=1)
    membrefondateur: int = Field(0, ge=0, le=1)
    membrecotisant: int = Field(0, ge=0, le=1)
    donateur: int = Field(0, ge=0, le=1)
    agentrecette: int = Field(0, ge=0, le=1)
    dateadhesion: date = Field(..., description="Date d'adhésion")
    fonction: Optional[str] = Field(None, max_length=100)
    telfix: Optional[str] = Field(None, max_length=20)
    fax: Optional[str] = Field(None, max_length=20)
    mobile: Optional[str] = Field(None, max_length=20)
    adresse1: Optional[str] = Field(None, max_length=255)
    adresse2: Optional[str] = Field(None, max_length=255)
    codepostal: Optional[str] = Field(None, max_length=10)
    ville: Optional[str] = Field(None, max_length=100)
    pays: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    montantcotisation: Decimal = Field(Decimal("0"), ge=0)
    idagentrecetteref: Optional[int] = Field(None, ge=1, description="Contact percepteur")

    @field_validator(*ROLE_FLAGS, mode="before")
    @classmethod
    def normalize_flags(cls, v):
        return coerce_flag(v)

    @field_validator("prenom", "nom")
    @classmethod
    def strip_names(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Le prénom et le nom sont requis (2 caractères minimum)")
        return v


class ContactFilters(BaseModel):
    """Filtres de la liste des contacts transmis tels quels à l'API."""
    adherent: Optional[bool] = None
    membrefondateur: Optional[bool] = None
    membrecotisant: Optional[bool] = None
    donateur: Optional[bool] = None
    agentrecette: Optional[bool] = None
    order_by: Optional[str] = None
    order_dir: Optional[str] = Field(None, pattern="^(asc|desc)$")
    nom_ou_prenom: Optional[str] = None
