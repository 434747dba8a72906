"""
Tests unitaires du cache des données de référence.
"""

import asyncio
from datetime import timezone

import pytest

from alnour.services.reference_data import ReferenceDataCache


@pytest.mark.unit
@pytest.mark.asyncio
class TestReferenceDataLoad:
    """Chargement et partition des contacts."""

    async def test_load_partitions_contacts(self, reference):
        await reference.load()

        assert reference.loaded is True
        assert reference.error is None
        assert reference.loaded_at.tzinfo is timezone.utc
        assert reference.contacts_total == 4
        assert [c.idcontact for c in reference.percepteurs] == [3]
        assert sorted(c.idcontact for c in reference.cotisants) == [1, 2]
        assert len(reference.bank_accounts) == 2

    async def test_fetches_with_large_page(self, reference, fake_api):
        await reference.load()

        contacts_call = fake_api.calls("GET", "contacts")[0]
        assert contacts_call.url.params["limit"] == "1000"
        assert contacts_call.url.params["page"] == "1"
        assert len(fake_api.calls("GET", "comptesbancaires")) == 1

    async def test_failure_degrades_to_empty_list(self, reference, fake_api):
        fake_api.failures["comptesbancaires"] = 500

        await reference.load()

        assert reference.loaded is True
        assert reference.bank_accounts == []
        assert len(reference.contacts) == 4
        assert "500" in reference.error

    async def test_zero_date_does_not_block_loading(self, reference, fake_api):
        fake_api.data["contacts"][0]["dateadhesion"] = "0000-00-00"

        await reference.load()

        assert reference.error is None
        assert len(reference.contacts) == 4
        assert reference.get_contact(1).dateadhesion is None

    async def test_invalid_rows_degrade_to_empty_list(self, reference, fake_api):
        fake_api.data["contacts"][0]["idcontact"] = "abc"

        await reference.load()

        assert reference.loaded is True
        assert reference.contacts == []
        assert len(reference.bank_accounts) == 2
        assert "Données invalides" in reference.error

    async def test_reload_clears_error(self, reference, fake_api):
        fake_api.failures["contacts"] = 503
        await reference.load()
        assert reference.contacts == []
        assert reference.contacts_total == 0

        del fake_api.failures["contacts"]
        await reference.reload()

        assert reference.error is None
        assert len(reference.contacts) == 4

    async def test_ensure_loaded_fetches_once(self, reference, fake_api):
        """Des premiers appels concurrents ne déclenchent qu'un chargement."""
        await asyncio.gather(*(reference.ensure_loaded() for _ in range(3)))
        await reference.ensure_loaded()

        assert len(fake_api.calls("GET", "contacts")) == 1
        assert len(fake_api.calls("GET", "comptesbancaires")) == 1

    async def test_page_size_override(self, api_client, fake_api):
        cache = ReferenceDataCache(api_client, page_size=50)
        await cache.load()
        assert fake_api.calls("GET", "contacts")[0].url.params["limit"] == "50"


@pytest.mark.unit
@pytest.mark.asyncio
class TestReferenceDataLookups:
    """Résolution des noms affichés."""

    async def test_contact_name(self, reference):
        await reference.load()

        assert reference.get_contact_name(1) == "Amina Diallo"
        assert reference.get_contact_name(None) == "-"
        assert reference.get_contact_name(0) == "-"
        assert reference.get_contact_name(404) == "Contact inconnu"

    async def test_bank_account_name(self, reference):
        await reference.load()

        assert reference.get_bank_account_name(2) == "Livret école"
        assert reference.get_bank_account_name(None) == "-"
        assert reference.get_bank_account_name(7) == "Compte inconnu"

    async def test_get_contact(self, reference):
        await reference.load()

        assert reference.get_contact(3).is_percepteur is True
        assert reference.get_contact(None) is None
