"""
Routes des opérations financières: liste paginée et filtrée, saisie, modification.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import get_api_client, get_current_active_operator, require_writer
from alnour.core.logging import logger
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.operation import Operation, OperationCreate, OperationFilters
from alnour.services.api_client import AlNourAPIClient


router = APIRouter()


@router.get(
    "/",
    response_model=PaginatedResponse[Operation],
    summary="Liste des opérations",
)
async def list_operations(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    idtypeoperation: Optional[int] = Query(None, description="Type d'opération"),
    moyenpaiement: Optional[int] = Query(None, description="Moyen de paiement"),
    moiscotisation: Optional[int] = Query(None, ge=1, le=12),
    anneecotisation: Optional[int] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_dir: Optional[str] = Query(None, alias="orderDir", pattern="^(asc|desc)$"),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    filters = OperationFilters(
        idtypeoperation=idtypeoperation,
        moyenpaiement=moyenpaiement,
        moiscotisation=moiscotisation,
        anneecotisation=anneecotisation,
        order_by=order_by,
        order_dir=order_dir,
    )
    return await client.list_operations(page=page, limit=limit, filters=filters)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Saisir une opération",
)
async def create_operation(
    operation: OperationCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    """
    Enregistre une opération.

    - **idtypeoperation**: type (1 à 13)
    - **moyenpaiement**: moyen de paiement (1 à 5)
    - **credit** / **debit**: montants positifs
    """
    logger.info(f"Saisie d'une opération par {current_operator.email}")
    return await client.create_operation(operation)


@router.put(
    "/{operation_id}",
    summary="Modifier une opération",
)
async def update_operation(
    operation_id: int,
    operation: OperationCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    logger.info(f"Modification de l'opération {operation_id} par {current_operator.email}")
    return await client.update_operation(operation_id, operation)
