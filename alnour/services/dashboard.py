"""
Indicateurs du tableau de bord: effectifs, montants et dernières cotisations reçues.
"""

import asyncio
from decimal import Decimal
from typing import List, TypeVar

from alnour.config import settings
from alnour.core.logging import logger
from alnour.models.referentiel import TypeOperation
from alnour.schemas.audit import DashboardResponse
from alnour.services.api_client import AlNourAPIClient
from alnour.services.reference_data import ReferenceDataCache


RECENT_LIMIT = 5

AppelT = TypeVar("AppelT")


def most_recent(appels: List[AppelT], limit: int = RECENT_LIMIT) -> List[AppelT]:
    """Appels triés par date de réception décroissante, les appels sans date en dernier."""
    dated = [a for a in appels if a.datereceptioncotisation is not None]
    undated = [a for a in appels if a.datereceptioncotisation is None]
    dated.sort(key=lambda a: a.datereceptioncotisation, reverse=True)
    return (dated + undated)[:limit]


async def build_dashboard(
    client: AlNourAPIClient,
    reference: ReferenceDataCache,
) -> DashboardResponse:
    await reference.ensure_loaded()

    page_size = settings.REFERENCE_PAGE_SIZE
    cotisations, cotisations_ecole, operations = await asyncio.gather(
        client.list_appels_cotisation(page=1, limit=page_size),
        client.list_appels_cotisation_ecole(page=1, limit=page_size),
        client.fetch_all_operations(),
    )

    montant_cotisations = sum(
        (op.credit for op in operations if op.idtypeoperation == TypeOperation.COTISATION_ADHERENT),
        Decimal("0"),
    )
    montant_operations = sum((op.credit for op in operations), Decimal("0"))

    logger.debug(
        f"Tableau de bord: {reference.contacts_total} contacts, {len(operations)} opérations"
    )

    return DashboardResponse(
        total_contacts=reference.contacts_total,
        total_adherents=sum(1 for c in reference.contacts if c.adherent == 1),
        total_cotisations=cotisations.pagination.total or len(cotisations.data),
        total_cotisations_ecole=cotisations_ecole.pagination.total or len(cotisations_ecole.data),
        montant_cotisations=montant_cotisations,
        montant_operations=montant_operations,
        recent_cotisations=most_recent(cotisations.data),
        recent_cotisations_ecole=most_recent(cotisations_ecole.data),
    )
