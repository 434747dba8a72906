"""
Routes des contacts: liste paginée et filtrée, création, modification.
Les données sont relayées vers l'API REST de l'association.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from alnour.api.deps import (
    get_api_client,
    get_current_active_operator,
    get_reference_data,
    require_writer,
)
from alnour.models.operator import Operator
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.contact import Contact, ContactCreate, ContactFilters
from alnour.services.api_client import AlNourAPIClient
from alnour.services.reference_data import ReferenceDataCache


router = APIRouter()


@router.get(
    "/",
    response_model=PaginatedResponse[Contact],
    summary="Liste des contacts",
)
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    adherent: Optional[bool] = Query(None),
    membrefondateur: Optional[bool] = Query(None),
    membrecotisant: Optional[bool] = Query(None),
    donateur: Optional[bool] = Query(None),
    agentrecette: Optional[bool] = Query(None),
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order_dir: Optional[str] = Query(None, alias="orderDir", pattern="^(asc|desc)$"),
    nom_ou_prenom: Optional[str] = Query(None, alias="nomOuPrenom"),
    client: AlNourAPIClient = Depends(get_api_client),
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    """
    Liste les contacts. Les indicateurs de rôle (adherent, donateur, ...)
    et le tri sont transmis tels quels à l'API.
    """
    filters = ContactFilters(
        adherent=adherent,
        membrefondateur=membrefondateur,
        membrecotisant=membrecotisant,
        donateur=donateur,
        agentrecette=agentrecette,
        order_by=order_by,
        order_dir=order_dir,
        nom_ou_prenom=nom_ou_prenom,
    )
    return await client.list_contacts(page=page, limit=limit, filters=filters)


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Créer un contact",
)
async def create_contact(
    contact: ContactCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    created = await client.create_contact(contact)
    # Les listes de percepteurs et cotisants doivent refléter le nouveau contact
    await reference.reload()
    return created


@router.put(
    "/{contact_id}",
    summary="Modifier un contact",
)
async def update_contact(
    contact_id: int,
    contact: ContactCreate,
    client: AlNourAPIClient = Depends(get_api_client),
    reference: ReferenceDataCache = Depends(get_reference_data),
    current_operator: Operator = Depends(require_writer),
) -> Any:
    updated = await client.update_contact(contact_id, contact)
    await reference.reload()
    return updated
