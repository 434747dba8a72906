"""
Schémas des vues d'audit: regroupements hiérarchiques, statistiques et tableau de bord.
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from alnour.schemas.appel_cotisation import AppelCotisation, AppelCotisationEcole
from alnour.schemas.compte_bancaire import CompteBancaire
from alnour.schemas.contact import Contact
from alnour.schemas.operation import Operation


class GroupLevel(str, enum.Enum):
    """Dimensions de regroupement des opérations."""
    MONTH = "month"
    CONTACT = "contact"
    TYPE = "type"
    BANK_ACCOUNT = "bank_account"


class OperationGroup(BaseModel):
    """
    Nœud de l'arbre de regroupement.

    `children` n'est renseigné que s'il reste des niveaux de regroupement.
    """
    key: str
    level: GroupLevel
    operations: List[Operation] = Field(default_factory=list)
    total_credit: Decimal = Decimal("0")
    total_debit: Decimal = Decimal("0")
    count: int = 0
    children: Optional[List["OperationGroup"]] = None

    @property
    def balance(self) -> Decimal:
        return self.total_credit - self.total_debit


OperationGroup.model_rebuild()


class GroupStats(BaseModel):
    """Ligne de statistiques pour une combinaison de valeurs de regroupement."""
    group_values: Dict[str, str] = Field(default_factory=dict)
    count: int = 0
    total_credit: Decimal = Decimal("0")
    total_debit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class GroupedOperationsResponse(BaseModel):
    group_by: List[GroupLevel]
    total_operations: int
    total_credit: Decimal
    total_debit: Decimal
    groups: List[OperationGroup]


class ReferenceDataResponse(BaseModel):
    """Vue du cache des données de référence."""
    loaded: bool
    loaded_at: Optional[datetime] = None
    error: Optional[str] = None
    contacts_count: int = 0
    percepteurs: List[Contact] = Field(default_factory=list)
    cotisants: List[Contact] = Field(default_factory=list)
    bank_accounts: List[CompteBancaire] = Field(default_factory=list)
    months: List[Dict[str, object]] = Field(default_factory=list)
    types_operation: Dict[int, str] = Field(default_factory=dict)
    moyens_paiement: Dict[int, str] = Field(default_factory=dict)


class DashboardResponse(BaseModel):
    total_contacts: int
    total_adherents: int
    total_cotisations: int
    total_cotisations_ecole: int
    montant_cotisations: Decimal
    montant_operations: Decimal
    recent_cotisations: List[AppelCotisation]
    recent_cotisations_ecole: List[AppelCotisationEcole]
