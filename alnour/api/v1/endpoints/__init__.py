"""
Endpoints de l'API v1.
"""

from . import (
    auth,
    operators,
    contacts,
    adherents,
    operations,
    annees,
    appels_cotisation,
    comptes_bancaires,
    reference,
    audit,
    dashboard,
)

__all__ = [
    "auth",
    "operators",
    "contacts",
    "adherents",
    "operations",
    "annees",
    "appels_cotisation",
    "comptes_bancaires",
    "reference",
    "audit",
    "dashboard",
]
