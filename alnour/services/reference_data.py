"""
Cache des données de référence: contacts et comptes bancaires.

Chargé une fois pour la durée de vie du processus, puis filtré localement en
percepteurs (agents de recette) et cotisants. Un rechargement manuel est
possible après un échec.
"""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional

from alnour.config import settings
from alnour.core.logging import logger
from alnour.schemas.compte_bancaire import CompteBancaire
from alnour.schemas.contact import Contact
from alnour.services.api_client import AlNourAPIClient, AlNourAPIError


AUCUN = "-"
CONTACT_INCONNU = "Contact inconnu"
COMPTE_INCONNU = "Compte inconnu"


class ReferenceDataCache:
    """Contacts et comptes bancaires partagés par les vues de la console."""

    def __init__(self, client: AlNourAPIClient, page_size: Optional[int] = None):
        self._client = client
        self.page_size = page_size or settings.REFERENCE_PAGE_SIZE
        self._lock = asyncio.Lock()
        self._contacts: Dict[int, Contact] = {}
        self._bank_accounts: Dict[int, CompteBancaire] = {}
        self.contacts_total: int = 0
        self.loaded: bool = False
        self.loaded_at: Optional[datetime] = None
        self.error: Optional[str] = None

    @property
    def contacts(self) -> List[Contact]:
        return list(self._contacts.values())

    @property
    def bank_accounts(self) -> List[CompteBancaire]:
        return list(self._bank_accounts.values())

    @property
    def percepteurs(self) -> List[Contact]:
        """Contacts habilités à percevoir les paiements (agent de recette)."""
        return [c for c in self._contacts.values() if c.is_percepteur]

    @property
    def cotisants(self) -> List[Contact]:
        """Contacts membres cotisants."""
        return [c for c in self._contacts.values() if c.is_cotisant]

    async def load(self) -> None:
        """
        Charge contacts et comptes en parallèle.

        Un échec de l'API sur l'une des deux listes donne une liste vide et
        renseigne `error`, sans bloquer le reste de la console.
        """
        async with self._lock:
            await self._fetch()

    async def ensure_loaded(self) -> None:
        """Charge les données au premier appel; les appels concurrents attendent ce chargement."""
        if self.loaded:
            return
        async with self._lock:
            if not self.loaded:
                await self._fetch()

    async def reload(self) -> None:
        logger.info("Rechargement des données de référence")
        await self.load()

    async def _fetch(self) -> None:
        contacts_result, accounts_result = await asyncio.gather(
            self._client.list_contacts(page=1, limit=self.page_size),
            self._client.list_comptes_bancaires(page=1, limit=self.page_size),
            return_exceptions=True,
        )

        errors = []
        for result in (contacts_result, accounts_result):
            if isinstance(result, AlNourAPIError):
                errors.append(result.message)
            elif isinstance(result, BaseException):
                raise result

        if isinstance(contacts_result, AlNourAPIError):
            self._contacts = {}
            self.contacts_total = 0
        else:
            self._contacts = {c.idcontact: c for c in contacts_result.data}
            self.contacts_total = contacts_result.pagination.total or len(self._contacts)

        if isinstance(accounts_result, AlNourAPIError):
            self._bank_accounts = {}
        else:
            self._bank_accounts = {a.idcompte: a for a in accounts_result.data}

        self.error = "; ".join(errors) if errors else None
        self.loaded = True
        self.loaded_at = datetime.now(timezone.utc)

        if self.error:
            logger.error(f"Erreur lors du chargement des données de référence: {self.error}")
        else:
            logger.info(
                f"Données de référence chargées: {len(self._contacts)} contacts, "
                f"{len(self._bank_accounts)} comptes bancaires"
            )

    def get_contact(self, contact_id: Optional[int]) -> Optional[Contact]:
        if not contact_id:
            return None
        return self._contacts.get(contact_id)

    def get_bank_account(self, account_id: Optional[int]) -> Optional[CompteBancaire]:
        if not account_id:
            return None
        return self._bank_accounts.get(account_id)

    def get_contact_name(self, contact_id: Optional[int]) -> str:
        """"prénom nom" du contact, "-" sans identifiant, "Contact inconnu" sinon."""
        if not contact_id:
            return AUCUN
        contact = self._contacts.get(contact_id)
        return contact.full_name if contact else CONTACT_INCONNU

    def get_bank_account_name(self, account_id: Optional[int]) -> str:
        """Libellé du compte, "-" sans identifiant, "Compte inconnu" sinon."""
        if not account_id:
            return AUCUN
        account = self._bank_accounts.get(account_id)
        return account.libelle if account and account.libelle else COMPTE_INCONNU


__all__ = [
    "ReferenceDataCache",
    "AUCUN",
    "CONTACT_INCONNU",
    "COMPTE_INCONNU",
]
