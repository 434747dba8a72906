"""
Routes d'audit: opérations regroupées, statistiques par groupe et rapport PDF.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from alnour.api.deps import get_api_client, get_current_active_operator, get_reference_data
from alnour.config import settings
from alnour.models.operator import Operator
from alnour.schemas.audit import GroupLevel, GroupStats, GroupedOperationsResponse
from alnour.schemas.operation import Operation, OperationFilters
from alnour.services.api_client import AlNourAPIClient
from alnour.services.grouping import OperationGrouper
from alnour.services.reference_data import ReferenceDataCache
from alnour.services.report_service import generate_operations_report


router = APIRouter()


def operation_filters(
    idtypeoperation: Optional[int] = Query(None, description="Type d'opération"),
    moyenpaiement: Optional[int] = Query(None, description="Moyen de paiement"),
    moiscotisation: Optional[int] = Query(None, ge=1, le=12),
    anneecotisation: Optional[int] = Query(None),
) -> OperationFilters:
    return OperationFilters(
        idtypeoperation=idtypeoperation,
        moyenpaiement=moyenpaiement,
        moiscotisation=moiscotisation,
        anneecotisation=anneecotisation,
    )


async def _load(
    client: AlNourAPIClient,
    reference: ReferenceDataCache,
    filters: OperationFilters,
) -> List[Operation]:
    await reference.ensure_loaded()
    return await client.fetch_all_operations(filters=filters)


@router.get(
    "/groups",
    response_model=GroupedOperationsResponse,
    summary="Opérations regroupées",
)
async def grouped_operations(
    group_by: List[GroupLevel] = Query(default=[], description="Niveaux de regroupement, dans l'ordre"),
    locale: Optional[str] = Query(None, pattern="^(fr|en)$"),
    filters: OperationFilters = Depends(operation_filters),
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    """
    Regroupe toutes les opérations selon les niveaux demandés
    (month, contact, type, bank_account). Sans niveau, `groups` est vide.
    """
    operations = await _load(client, reference, filters)
    grouper = OperationGrouper.from_reference(reference, locale or settings.REPORT_LOCALE)
    return GroupedOperationsResponse(
        group_by=group_by,
        total_operations=len(operations),
        total_credit=sum((op.credit for op in operations), Decimal("0")),
        total_debit=sum((op.debit for op in operations), Decimal("0")),
        groups=grouper.group(operations, group_by),
    )


@router.get(
    "/stats",
    response_model=List[GroupStats],
    summary="Statistiques par groupe",
)
async def group_stats(
    group_by: List[GroupLevel] = Query(default=[]),
    locale: Optional[str] = Query(None, pattern="^(fr|en)$"),
    filters: OperationFilters = Depends(operation_filters),
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    operations = await _load(client, reference, filters)
    grouper = OperationGrouper.from_reference(reference, locale or settings.REPORT_LOCALE)
    return grouper.stats(operations, group_by)


@router.get(
    "/report",
    summary="Rapport PDF des opérations",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def operations_report(
    ids: Optional[List[int]] = Query(None, description="Opérations sélectionnées"),
    group_by: List[GroupLevel] = Query(default=[]),
    filters: OperationFilters = Depends(operation_filters),
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Response:
    """
    Télécharge le rapport PDF. Avec `ids`, seules les opérations sélectionnées
    sont incluses; avec `group_by`, un récapitulatif par groupe précède le détail.
    """
    operations = await _load(client, reference, filters)
    if ids:
        selected = set(ids)
        operations = [op for op in operations if op.idoperation in selected]

    groups = None
    if group_by:
        grouper = OperationGrouper.from_reference(reference, settings.REPORT_LOCALE)
        groups = grouper.stats(operations, group_by)

    pdf = generate_operations_report(operations, reference.get_contact_name, groups=groups)
    filename = f"rapport-operations-{datetime.now().strftime('%Y%m%d-%H%M')}.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
