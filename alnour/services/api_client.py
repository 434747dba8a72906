"""
Client de l'API REST de l'association Al Nour.

Toutes les données métier (contacts, opérations, comptes, école) vivent dans
cette API; la console se contente de relayer les lectures et écritures.
"""

import time
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, ValidationError

from alnour.config import settings
from alnour.core.logging import logger, log_api_call
from alnour.schemas.common import PaginatedResponse
from alnour.schemas.contact import Contact, ContactCreate, ContactFilters
from alnour.schemas.operation import Operation, OperationCreate, OperationFilters
from alnour.schemas.compte_bancaire import CompteBancaire, CompteBancaireCreate
from alnour.schemas.ecole import (
    AnneeScolaire,
    AnneeScolaireCreate,
    AdherentEcole,
    AdherentEcoleCreate,
    AdherentFilters,
)
from alnour.schemas.appel_cotisation import (
    AppelCotisation,
    AppelCotisationCreate,
    AppelCotisationEcole,
    AppelCotisationEcoleCreate,
)


ModelT = TypeVar("ModelT", bound=BaseModel)

# Noms des paramètres de requête attendus par l'API
_QUERY_NAMES = {
    "order_by": "orderBy",
    "order_dir": "orderDir",
    "nom_ou_prenom": "nomOuPrenom",
}


class AlNourAPIError(Exception):
    """Échec d'un appel à l'API REST: statut en erreur, API injoignable ou réponse illisible."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.endpoint = endpoint


def filters_to_params(filters: Optional[BaseModel]) -> Dict[str, Any]:
    """
    Convertit un objet de filtres en paramètres de requête.
    Les filtres non renseignés sont omis, les booléens sont envoyés en "true"/"false".
    """
    if filters is None:
        return {}
    params: Dict[str, Any] = {}
    for name, value in filters.model_dump(exclude_none=True).items():
        if value == "":
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params[_QUERY_NAMES.get(name, name)] = value
    return params


class AlNourAPIClient:
    """
    Client asynchrone de l'API REST.

    Un en-tête `Authorization` statique, lu dans la configuration, accompagne
    chaque requête. Aucune relance automatique n'est faite en cas d'échec.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.ALNOUR_API_URL).rstrip("/")
        headers = {"Content-Type": "application/json"}
        api_token = settings.ALNOUR_API_TOKEN if token is None else token
        if api_token:
            headers["Authorization"] = api_token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout or settings.ALNOUR_API_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "AlNourAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        start_time = time.time()
        try:
            response = await self._client.request(method, endpoint, params=params, json=json)
        except httpx.HTTPError as e:
            log_api_call(method, endpoint, None, (time.time() - start_time) * 1000)
            raise AlNourAPIError(
                f"API Al Nour injoignable: {e}",
                endpoint=endpoint,
            ) from e

        log_api_call(method, endpoint, response.status_code, (time.time() - start_time) * 1000)

        if response.is_error:
            raise AlNourAPIError(
                f"Une erreur est survenue: {response.status_code}",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise AlNourAPIError(
                "Réponse illisible de l'API Al Nour",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from e

    async def _list(
        self,
        resource: str,
        model: Type[ModelT],
        page: int,
        limit: int,
        filters: Optional[BaseModel] = None,
    ) -> PaginatedResponse[ModelT]:
        params = {"page": page, "limit": limit, **filters_to_params(filters)}
        endpoint = f"/{resource}"
        payload = await self._request("GET", endpoint, params=params)
        try:
            return PaginatedResponse[model].model_validate(payload or {})
        except ValidationError as e:
            logger.warning(f"Données invalides reçues de {endpoint}: {e}")
            raise AlNourAPIError(
                f"Données invalides reçues de l'API: {e.error_count()} erreur(s)",
                endpoint=endpoint,
            ) from e

    @staticmethod
    def _payload(data: BaseModel) -> Dict[str, Any]:
        # Montants envoyés en nombres, dates au format ISO 8601
        return jsonable_encoder(data.model_dump(exclude_none=True))

    async def _create(self, resource: str, data: BaseModel) -> Any:
        return await self._request("POST", f"/{resource}", json=self._payload(data))

    async def _update(self, resource: str, item_id: int, data: BaseModel) -> Any:
        return await self._request("PUT", f"/{resource}/{item_id}", json=self._payload(data))

    # ============== Contacts ==============

    async def list_contacts(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[ContactFilters] = None,
    ) -> PaginatedResponse[Contact]:
        return await self._list("contacts", Contact, page, limit, filters)

    async def create_contact(self, contact: ContactCreate) -> Any:
        logger.info(f"Création du contact {contact.prenom} {contact.nom}")
        return await self._create("contacts", contact)

    async def update_contact(self, contact_id: int, contact: ContactCreate) -> Any:
        logger.info(f"Mise à jour du contact {contact_id}")
        return await self._update("contacts", contact_id, contact)

    # ============== Adhérents école ==============

    async def list_adherents(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[AdherentFilters] = None,
    ) -> PaginatedResponse[AdherentEcole]:
        return await self._list("adherents", AdherentEcole, page, limit, filters)

    async def create_adherent(self, adherent: AdherentEcoleCreate) -> Any:
        return await self._create("adherents", adherent)

    async def update_adherent(self, contact_id: int, adherent: AdherentEcoleCreate) -> Any:
        return await self._update("adherents", contact_id, adherent)

    # ============== Opérations ==============

    async def list_operations(
        self,
        page: int = 1,
        limit: int = 10,
        filters: Optional[OperationFilters] = None,
    ) -> PaginatedResponse[Operation]:
        return await self._list("operations", Operation, page, limit, filters)

    async def fetch_all_operations(
        self,
        filters: Optional[OperationFilters] = None,
        page_size: Optional[int] = None,
    ) -> List[Operation]:
        """Parcourt toutes les pages de la liste des opérations."""
        page_size = page_size or settings.AUDIT_PAGE_SIZE
        operations: List[Operation] = []
        page = 1
        while True:
            response = await self.list_operations(page=page, limit=page_size, filters=filters)
            operations.extend(response.data)
            if not response.pagination.has_next or not response.data:
                break
            page += 1
        logger.debug(f"{len(operations)} opérations chargées en {page} page(s)")
        return operations

    async def create_operation(self, operation: OperationCreate) -> Any:
        logger.info(f"Création de l'opération '{operation.libelle}'")
        return await self._create("operations", operation)

    async def update_operation(self, operation_id: int, operation: OperationCreate) -> Any:
        logger.info(f"Mise à jour de l'opération {operation_id}")
        return await self._update("operations", operation_id, operation)

    # ============== Années scolaires ==============

    async def list_annees(self, page: int = 1, limit: int = 10) -> PaginatedResponse[AnneeScolaire]:
        return await self._list("annees", AnneeScolaire, page, limit)

    async def create_annee(self, annee: AnneeScolaireCreate) -> Any:
        return await self._create("annees", annee)

    async def update_annee(self, annee_id: int, annee: AnneeScolaireCreate) -> Any:
        return await self._update("annees", annee_id, annee)

    # ============== Appels de cotisation ==============

    async def list_appels_cotisation(
        self, page: int = 1, limit: int = 10
    ) -> PaginatedResponse[AppelCotisation]:
        return await self._list("appelcotisations", AppelCotisation, page, limit)

    async def create_appel_cotisation(self, appel: AppelCotisationCreate) -> Any:
        return await self._create("appelcotisations", appel)

    async def update_appel_cotisation(self, appel_id: int, appel: AppelCotisationCreate) -> Any:
        return await self._update("appelcotisations", appel_id, appel)

    async def list_appels_cotisation_ecole(
        self, page: int = 1, limit: int = 10
    ) -> PaginatedResponse[AppelCotisationEcole]:
        return await self._list("appelcotisationsecole", AppelCotisationEcole, page, limit)

    async def create_appel_cotisation_ecole(self, appel: AppelCotisationEcoleCreate) -> Any:
        return await self._create("appelcotisationsecole", appel)

    async def update_appel_cotisation_ecole(
        self, appel_id: int, appel: AppelCotisationEcoleCreate
    ) -> Any:
        return await self._update("appelcotisationsecole", appel_id, appel)

    # ============== Comptes bancaires ==============

    async def list_comptes_bancaires(
        self, page: int = 1, limit: int = 10
    ) -> PaginatedResponse[CompteBancaire]:
        return await self._list("comptesbancaires", CompteBancaire, page, limit)

    async def create_compte_bancaire(self, compte: CompteBancaireCreate) -> Any:
        return await self._create("comptesbancaires", compte)

    async def update_compte_bancaire(self, compte_id: int, compte: CompteBancaireCreate) -> Any:
        return await self._update("comptesbancaires", compte_id, compte)


__all__ = ["AlNourAPIClient", "AlNourAPIError", "filters_to_params"]
