"""
Tests unitaires du client de l'API REST (transport httpx simulé).
"""

import json
from datetime import date
from decimal import Decimal

import httpx
import pytest

from alnour.schemas.contact import ContactFilters
from alnour.schemas.ecole import AnneeScolaireCreate
from alnour.schemas.operation import OperationCreate, OperationFilters
from alnour.services.api_client import AlNourAPIClient, AlNourAPIError, filters_to_params


@pytest.mark.unit
class TestFiltersToParams:
    """Conversion des filtres en paramètres de requête."""

    def test_none_filters(self):
        assert filters_to_params(None) == {}

    def test_unset_filters_are_omitted(self):
        params = filters_to_params(ContactFilters(adherent=True, nom_ou_prenom=""))
        assert params == {"adherent": "true"}

    def test_booleans_and_camel_case_names(self):
        params = filters_to_params(ContactFilters(
            donateur=False,
            order_by="nom",
            order_dir="desc",
            nom_ou_prenom="ami",
        ))
        assert params == {
            "donateur": "false",
            "orderBy": "nom",
            "orderDir": "desc",
            "nomOuPrenom": "ami",
        }

    def test_operation_filters(self):
        params = filters_to_params(OperationFilters(idtypeoperation=2, moiscotisation=3))
        assert params == {"idtypeoperation": 2, "moiscotisation": 3}


@pytest.mark.unit
@pytest.mark.asyncio
class TestAlNourAPIClient:
    """Appels à l'API simulée."""

    async def test_list_contacts(self, api_client, fake_api):
        response = await api_client.list_contacts(page=1, limit=2, filters=ContactFilters(adherent=True))

        assert [c.idcontact for c in response.data] == [1, 2]
        assert response.pagination.total == 4
        assert response.pagination.has_next is True

        request = fake_api.requests[-1]
        assert request.url.path == "/api/contacts"
        assert request.url.params["adherent"] == "true"
        assert request.url.params["limit"] == "2"

    async def test_static_authorization_header(self, api_client, fake_api):
        await api_client.list_annees()
        assert fake_api.requests[-1].headers["Authorization"] == "Bearer api-token"

    async def test_no_authorization_header_without_token(self, fake_api):
        client = AlNourAPIClient(
            base_url="http://alnour.test/api",
            token="",
            transport=httpx.MockTransport(fake_api.handler),
        )
        async with client:
            await client.list_annees()
        assert "Authorization" not in fake_api.requests[-1].headers

    async def test_error_status_raises(self, api_client, fake_api):
        fake_api.failures["operations"] = 500

        with pytest.raises(AlNourAPIError) as exc_info:
            await api_client.list_operations()

        assert exc_info.value.status_code == 500
        assert exc_info.value.endpoint == "/operations"
        assert exc_info.value.message == "Une erreur est survenue: 500"

    async def test_invalid_rows_raise_api_error(self, api_client, fake_api):
        fake_api.data["contacts"][0]["idcontact"] = "abc"

        with pytest.raises(AlNourAPIError) as exc_info:
            await api_client.list_contacts()

        assert exc_info.value.endpoint == "/contacts"
        assert "Données invalides" in exc_info.value.message

    async def test_unreadable_body_raises_api_error(self):
        client = AlNourAPIClient(
            base_url="http://alnour.test/api",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>")),
        )
        with pytest.raises(AlNourAPIError) as exc_info:
            await client.list_annees()

        assert exc_info.value.status_code == 200
        assert exc_info.value.endpoint == "/annees"

    async def test_transport_error_raises(self):
        def unreachable(request):
            raise httpx.ConnectError("connexion refusée", request=request)

        client = AlNourAPIClient(
            base_url="http://alnour.test/api",
            transport=httpx.MockTransport(unreachable),
        )
        with pytest.raises(AlNourAPIError) as exc_info:
            await client.list_contacts()

        assert exc_info.value.status_code is None
        await client.aclose()

    async def test_fetch_all_operations_walks_pages(self, api_client, fake_api):
        operations = await api_client.fetch_all_operations(page_size=2)

        assert [o.idoperation for o in operations] == [1, 2, 3]
        pages = [r.url.params["page"] for r in fake_api.calls("GET", "operations")]
        assert pages == ["1", "2"]

    async def test_create_operation_payload(self, api_client, fake_api):
        operation = OperationCreate(
            libelle="Cotisation janvier",
            dateoperation=date(2024, 1, 15),
            idtypeoperation=1,
            moyenpaiement=2,
            credit=Decimal("20.50"),
            idcontactpercepteur=3,
            idcontactcotisant=1,
            moiscotisation=1,
            anneecotisation=2024,
        )

        result = await api_client.create_operation(operation)

        request = fake_api.calls("POST", "operations")[0]
        payload = json.loads(request.content)
        assert payload["credit"] == 20.5
        assert payload["dateoperation"] == "2024-01-15"
        assert "refcheque" not in payload
        assert result["id"] == 99

    async def test_update_uses_put_with_id(self, api_client, fake_api):
        annee = AnneeScolaireCreate(annee=2024, libelle="2024-2025", montantcotisation=Decimal("150"))

        result = await api_client.update_annee(2024, annee)

        request = fake_api.requests[-1]
        assert request.method == "PUT"
        assert request.url.path == "/api/annees/2024"
        assert json.loads(request.content)["montantcotisation"] == 150
        assert result["id"] == 2024
