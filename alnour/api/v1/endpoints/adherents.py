"""
Routes des adhérents de l'école (inscriptions par année scolaire).
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import get_api_client, get_current_active_operator, require_writer
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.ecole import AdherentEcole, AdherentEcoleCreate, AdherentFilters
from alnour.services.api_client import AlNourAPIClient


router = APIRouter()


@router.get(
    "/",
    response_model=PaginatedResponse[AdherentEcole],
    summary="Liste des adhérents de l'école",
)
async def list_adherents(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    anneescolaire: Optional[int] = Query(None),
    nom_ou_prenom: Optional[str] = Query(None, alias="nomOuPrenom"),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_dir: Optional[str] = Query(None, alias="orderDir", pattern="^(asc|desc)$"),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    filters = AdherentFilters(
        anneescolaire=anneescolaire,
        nom_ou_prenom=nom_ou_prenom,
        order_by=order_by,
        order_dir=order_dir,
    )
    return await client.list_adherents(page=page, limit=limit, filters=filters)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Inscrire un adhérent",
)
async def create_adherent(
    adherent: AdherentEcoleCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.create_adherent(adherent)


@router.put(
    "/{contact_id}",
    summary="Modifier une inscription",
)
async def update_adherent(
    contact_id: int,
    adherent: AdherentEcoleCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.update_adherent(contact_id, adherent)
