"""
Module des schémas Pydantic de la console Al Nour.
Définit les entités de l'API REST, les formulaires et les réponses de la console.
"""

from .common import Pagination, PaginatedResponse, MessageResponse
from .contact import Contact, ContactCreate, ContactFilters
from .operation import Operation, OperationCreate, OperationFilters
from .compte_bancaire import CompteBancaire, CompteBancaireCreate
from .ecole import (
    AnneeScolaire,
    AnneeScolaireCreate,
    AdherentEcole,
    AdherentEcoleCreate,
    AdherentFilters,
)
from .appel_cotisation import (
    AppelCotisation,
    AppelCotisationCreate,
    AppelCotisationEcole,
    AppelCotisationEcoleCreate,
)
from .audit import (
    GroupLevel,
    OperationGroup,
    GroupStats,
    GroupedOperationsResponse,
    ReferenceDataResponse,
    DashboardResponse,
)
from .operator import (
    OperatorCreate,
    OperatorUpdate,
    OperatorResponse,
    OperatorLogin,
    Token,
    RefreshRequest,
    PasswordChange,
)

__all__ = [
    # Commun
    "Pagination",
    "PaginatedResponse",
    "MessageResponse",
    # Contacts
    "Contact",
    "ContactCreate",
    "ContactFilters",
    # Opérations
    "Operation",
    "OperationCreate",
    "OperationFilters",
    # Comptes bancaires
    "CompteBancaire",
    "CompteBancaireCreate",
    # Ecole
    "AnneeScolaire",
    "AnneeScolaireCreate",
    "AdherentEcole",
    "AdherentEcoleCreate",
    "AdherentFilters",
    # Appels de cotisation
    "AppelCotisation",
    "AppelCotisationCreate",
    "AppelCotisationEcole",
    "AppelCotisationEcoleCreate",
    # Audit
    "GroupLevel",
    "OperationGroup",
    "GroupStats",
    "GroupedOperationsResponse",
    "ReferenceDataResponse",
    "DashboardResponse",
    # Opérateurs
    "OperatorCreate",
    "OperatorUpdate",
    "OperatorResponse",
    "OperatorLogin",
    "Token",
    "RefreshRequest",
    "PasswordChange",
]
