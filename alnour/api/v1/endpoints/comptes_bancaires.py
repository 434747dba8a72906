"""
Routes des comptes bancaires de l'association.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import (
    get_api_client,
    get_current_active_operator,
    get_reference_data,
    require_writer,
)
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.compte_bancaire import CompteBancaire, CompteBancaireCreate
from alnour.services.api_client import AlNourAPIClient
from alnour.services.reference_data import ReferenceDataCache


router = APIRouter()


@router.get("/", response_model=PaginatedResponse[CompteBancaire], summary="Liste des comptes")
async def list_comptes_bancaires(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    return await client.list_comptes_bancaires(page=page, limit=limit)


@router.post("/", status_code=status.HTTP_201_CREATED, summary="Créer un compte bancaire")
async def create_compte_bancaire(
    compte: CompteBancaireCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    created = await client.create_compte_bancaire(compte)
    await reference.reload()
    return created


@router.put("/{compte_id}", summary="Modifier un compte bancaire")
async def update_compte_bancaire(
    compte_id: int,
    compte: CompteBancaireCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    updated = await client.update_compte_bancaire(compte_id, compte)
    await reference.reload()
    return updated
