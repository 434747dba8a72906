"""
Routeur principal de l'API v1.
Regroupe toutes les routes des différents modules.
"""

from fastapi import APIRouter

from alnour.api.v1.endpoints import (
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

api_router = APIRouter()

# Routes d'authentification
api_router.include_router(auth.router, prefix="/auth", tags=["Authentification"])

# Routes opérateurs
api_router.include_router(operators.router, prefix="/operators", tags=["Opérateurs"])

# Routes contacts et école
api_router.include_router(contacts.router, prefix="/contacts", tags=["Contacts"])
api_router.include_router(adherents.router, prefix="/adherents", tags=["Ecole"])
api_router.include_router(annees.router, prefix="/annees", tags=["Ecole"])

# Routes opérations et cotisations
api_router.include_router(operations.router, prefix="/operations", tags=["Opérations"])
api_router.include_router(
    appels_cotisation.router,
    prefix="/appelcotisations",
    tags=["Cotisations"],
)
api_router.include_router(
    appels_cotisation.ecole_router,
    prefix="/appelcotisationsecole",
    tags=["Cotisations"],
)

# Routes comptes bancaires
api_router.include_router(
    comptes_bancaires.router,
    prefix="/comptesbancaires",
    tags=["Comptes bancaires"],
)

# Routes audit et tableau de bord
api_router.include_router(reference.router, prefix="/reference", tags=["Données de référence"])
api_router.include_router(audit.router, prefix="/audit", tags=["Audit"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Tableau de bord"])
