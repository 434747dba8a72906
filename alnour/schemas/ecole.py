"""
Schémas Pydantic pour l'école: années scolaires et adhérents inscrits par année.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from alnour.schemas.common import coerce_amount


class AnneeScolaire(BaseModel):
    """Année scolaire et montant forfaitaire de cotisation."""
    annee: int
    libelle: str = ""
    montantcotisation: Decimal = Decimal("0")

    @field_validator("montantcotisation", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)


class AnneeScolaireCreate(BaseModel):
    """Formulaire d'une année scolaire."""
    annee: int = Field(..., ge=2000, description="Année de rentrée")
    libelle: str = Field(..., min_length=2, max_length=50, description="Libellé, ex: 2024-2025")
    montantcotisation: Decimal = Field(..., ge=0, description="Cotisation annuelle")


class AdherentEcole(BaseModel):
    """Inscription d'un contact à une année scolaire."""
    idcontact: int
    prenom: str = ""
    nom: str = ""
    anneescolaire: int
    nbenfants: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.prenom} {self.nom}"


class AdherentEcoleCreate(BaseModel):
    """Formulaire d'inscription d'un adhérent à l'école."""
    idcontact: int = Field(..., ge=1, description="Contact inscrit")
    anneescolaire: int = Field(..., ge=2000, description="Année scolaire")
    nbenfants: int = Field(..., ge=0, le=20, description="Nombre d'enfants inscrits")


class AdherentFilters(BaseModel):
    """Filtres de la liste des adhérents de l'école."""
    anneescolaire: Optional[int] = None
    nom_ou_prenom: Optional[str] = None
    order_by: Optional[str] = None
    order_dir: Optional[str] = Field(None, pattern="^(asc|desc)$")
