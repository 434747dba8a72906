"""
Route du tableau de bord.
"""

from typing import Any

from fastapi import APIRouter, Depends

from alnour.api.deps import get_api_client, get_current_active_operator, get_reference_data
from alnour.models.operator import Operator
from alnour.schemas.audit import DashboardResponse
from alnour.services.api_client import AlNourAPIClient
from alnour.services.dashboard import build_dashboard
from alnour.services.reference_data import ReferenceDataCache


router = APIRouter()


@router.get("/", response_model=DashboardResponse, summary="Tableau de bord")
async def get_dashboard(
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    """Effectifs, montants encaissés et cinq dernières cotisations reçues."""
    return await build_dashboard(client, reference)
