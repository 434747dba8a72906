"""
Module des modèles de la console Al Nour.
Modèles SQLAlchemy locaux et référentiels fixes de l'association.
"""

from .operator import Operator, OperatorRole
from .referentiel import (
    TypeOperation,
    MoyenPaiement,
    TYPES_OPERATION_LIBELLES,
    MOYENS_PAIEMENT_LIBELLES,
    get_type_operation_label,
    get_moyen_paiement_label,
    get_month_name,
    get_month_label,
    months_choices,
)

__all__ = [
    # Operator
    "Operator",
    "OperatorRole",
    # Référentiels
    "TypeOperation",
    "MoyenPaiement",
    "TYPES_OPERATION_LIBELLES",
    "MOYENS_PAIEMENT_LIBELLES",
    "get_type_operation_label",
    "get_moyen_paiement_label",
    "get_month_name",
    "get_month_label",
    "months_choices",
]
