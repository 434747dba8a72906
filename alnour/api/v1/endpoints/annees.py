"""
Routes des années scolaires.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import get_api_client, get_current_active_operator, require_writer
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.ecole import AnneeScolaire, AnneeScolaireCreate
from alnour.services.api_client import AlNourAPIClient


router = APIRouter()


@router.get("/", response_model=PaginatedResponse[AnneeScolaire], summary="Liste des années scolaires")
async def list_annees(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    return await client.list_annees(page=page, limit=limit)


@router.post("/", status_code=status.HTTP_201_CREATED, summary="Créer une année scolaire")
async def create_annee(
    annee: AnneeScolaireCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.create_annee(annee)


@router.put("/{annee_id}", summary="Modifier une année scolaire")
async def update_annee(
    annee_id: int,
    annee: AnneeScolaireCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.update_annee(annee_id, annee)
