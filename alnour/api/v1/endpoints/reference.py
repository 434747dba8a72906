"""
Routes des données de référence (contacts, percepteurs, cotisants, comptes, référentiels).
"""

from typing import Any

from fastapi import APIRouter, Depends

from alnour.api.deps import get_current_active_operator, get_reference_data
from alnour.models.operator import Operator
from alnour.models.referentiel import (
    TYPES_OPERATION_LIBELLES,
    MOYENS_PAIEMENT_LIBELLES,
    months_choices,
)
from alnour.schemas.audit import ReferenceDataResponse
from alnour.services.reference_data import ReferenceDataCache


router = APIRouter()


def _to_response(reference: ReferenceDataCache) -> ReferenceDataResponse:
    return ReferenceDataResponse(
        loaded=reference.loaded,
        loaded_at=reference.loaded_at,
        error=reference.error,
        contacts_count=reference.contacts_total,
        percepteurs=reference.percepteurs,
        cotisants=reference.cotisants,
        bank_accounts=reference.bank_accounts,
        months=months_choices(),
        types_operation={int(k): v for k, v in TYPES_OPERATION_LIBELLES.items()},
        moyens_paiement={int(k): v for k, v in MOYENS_PAIEMENT_LIBELLES.items()},
    )


@router.get(
    "/",
    response_model=ReferenceDataResponse,
    summary="Données de référence",
)
async def get_reference(
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    """
    Retourne les listes partagées par les formulaires. Un échec de chargement
    est signalé dans `error` sans faire échouer la requête.
    """
    await reference.ensure_loaded()
    return _to_response(reference)


@router.post(
    "/reload",
    response_model=ReferenceDataResponse,
    summary="Recharger les données de référence",
)
async def reload_reference(
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    await reference.reload()
    return _to_response(reference)
