"""
Routes des appels de cotisation: membres de l'association et école.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import get_api_client, get_current_active_operator, require_writer
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.appel_cotisation import (
    AppelCotisation,
    AppelCotisationCreate,
    AppelCotisationEcole,
    AppelCotisationEcoleCreate,
)
from alnour.services.api_client import AlNourAPIClient


router = APIRouter()
ecole_router = APIRouter()


# ============== Association ==============

@router.get("/", response_model=PaginatedResponse[AppelCotisation], summary="Appels de cotisation")
async def list_appels_cotisation(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    return await client.list_appels_cotisation(page=page, limit=limit)


@router.post("/", status_code=status.HTTP_201_CREATED, summary="Créer un appel de cotisation")
async def create_appel_cotisation(
    appel: AppelCotisationCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.create_appel_cotisation(appel)


@router.put("/{appel_id}", summary="Modifier un appel de cotisation")
async def update_appel_cotisation(
    appel_id: int,
    appel: AppelCotisationCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.update_appel_cotisation(appel_id, appel)


# ============== Ecole ==============

@ecole_router.get(
    "/",
    response_model=PaginatedResponse[AppelCotisationEcole],
    summary="Appels de cotisation de l'école",
)
async def list_appels_cotisation_ecole(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    return await client.list_appels_cotisation_ecole(page=page, limit=limit)


@ecole_router.post("/", status_code=status.HTTP_201_CREATED, summary="Créer un appel école")
async def create_appel_cotisation_ecole(
    appel: AppelCotisationEcoleCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.create_appel_cotisation_ecole(appel)


@ecole_router.put("/{appel_id}", summary="Modifier un appel école")
async def update_appel_cotisation_ecole(
    appel_id: int,
    appel: AppelCotisationEcoleCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    return await client.update_appel_cotisation_ecole(appel_id, appel)
