"""
Schémas Pydantic pour les opérations financières (crédits / débits).
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from alnour.models.referentiel import (
    TYPES_OPERATION_LIBELLES,
    MOYENS_PAIEMENT_LIBELLES,
    get_type_operation_label,
    get_moyen_paiement_label,
)
from alnour.schemas.common import coerce_amount, coerce_date


class Operation(BaseModel):
    """Opération telle que renvoyée par l'API REST."""
    idoperation: Optional[int] = None
    libelle: str = ""
    dateoperation: Optional[date] = None
    idtypeoperation: Optional[int] = None
    refoperation: Optional[str] = None
    moyenpaiement: Optional[int] = None
    refcheque: Optional[str] = None
    credit: Decimal = Decimal("0")
    debit: Decimal = Decimal("0")
    idcontactpercepteur: Optional[int] = None
    idcontactcotisant: Optional[int] = None
    membrecotisant: Optional[int] = None
    anneecotisation: Optional[int] = None
    moiscotisation: Optional[int] = None
    idcomptedestination: Optional[int] = None

    @field_validator("credit", "debit", mode="before")
    @classmethod
    def parse_amount(cls, v):
        return coerce_amount(v)

    @field_validator("dateoperation", mode="before")
    @classmethod
    def parse_date(cls, v):
        return coerce_date(v)

    @field_validator(
        "idcontactpercepteur", "idcontactcotisant", "idcomptedestination",
        mode="before",
    )
    @classmethod
    def empty_reference(cls, v):
        # 0 et "" signifient "pas de référence" côté API
        return None if v in ("", 0, "0") else v

    @property
    def type_label(self) -> str:
        return get_type_operation_label(self.idtypeoperation)

    @property
    def moyen_paiement_label(self) -> str:
        return get_moyen_paiement_label(self.moyenpaiement)

    @property
    def balance(self) -> Decimal:
        return self.credit - self.debit


class OperationCreate(BaseModel):
    """Formulaire de saisie d'une opération."""
    libelle: str = Field(..., min_length=2, max_length=255, description="Libellé")
    dateoperation: date = Field(..., description="Date de l'opération")
    idtypeoperation: int = Field(..., ge=1, description="Type d'opération")
    refoperation: Optional[str] = Field(None, max_length=100)
    moyenpaiement: int = Field(..., ge=1, description="Moyen de paiement")
    refcheque: Optional[str] = Field(None, max_length=100)
    credit: Decimal = Field(Decimal("0"), ge=0, description="Montant crédité")
    debit: Decimal = Field(Decimal("0"), ge=0, description="Montant débité")
    idcontactpercepteur: int = Field(..., ge=1, description="Contact percepteur")
    idcontactcotisant: int = Field(..., ge=1, description="Contact cotisant")
    membrecotisant: int = Field(0, ge=0, le=1)
    anneecotisation: int = Field(0, ge=0)
    moiscotisation: int = Field(0, ge=0, le=12)
    idcomptedestination: int = Field(0, ge=0, description="Compte bancaire de destination")

    @field_validator("idtypeoperation")
    @classmethod
    def validate_type(cls, v: int) -> int:
        if v not in TYPES_OPERATION_LIBELLES:
            raise ValueError("Le type d'opération est requis")
        return v

    @field_validator("moyenpaiement")
    @classmethod
    def validate_moyen(cls, v: int) -> int:
        if v not in MOYENS_PAIEMENT_LIBELLES:
            raise ValueError("Le moyen de paiement est requis")
        return v


class OperationFilters(BaseModel):
    """Filtres de la liste des opérations."""
    idtypeoperation: Optional[int] = None
    moyenpaiement: Optional[int] = None
    moiscotisation: Optional[int] = None
    anneecotisation: Optional[int] = None
    order_by: Optional[str] = None
    order_dir: Optional[str] = Field(None, pattern="^(asc|desc)$")
