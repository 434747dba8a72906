"""
Tests unitaires des schémas: conversions des champs de l'API et règles des formulaires.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from alnour.schemas import (
    AppelCotisationEcole,
    CompteBancaireCreate,
    Contact,
    ContactCreate,
    Operation,
    OperationCreate,
    PaginatedResponse,
    PasswordChange,
)


@pytest.mark.unit
class TestOperationWire:
    """Opérations telles que renvoyées par l'API."""

    def test_amounts_and_dates_are_coerced(self):
        operation = Operation(
            idoperation=1,
            dateoperation="2024-03-02T00:00:00.000Z",
            credit="12,50",
            debit=None,
        )
        assert operation.dateoperation == date(2024, 3, 2)
        assert operation.credit == Decimal("12.50")
        assert operation.debit == Decimal("0")
        assert operation.balance == Decimal("12.50")

    @pytest.mark.parametrize("raw", ["N/A", "NaN", "Infinity", "-inf", "   ", [1]])
    def test_unreadable_amount_counts_as_zero(self, raw):
        assert Operation(credit=raw).credit == Decimal("0")

    def test_numeric_amounts_kept(self):
        operation = Operation(credit=12.5, debit=3)
        assert operation.credit == Decimal("12.5")
        assert operation.debit == Decimal("3")

    @pytest.mark.parametrize("raw", ["0000-00-00", "pas une date", "2024-13-45"])
    def test_unreadable_date_becomes_none(self, raw):
        assert Operation(dateoperation=raw).dateoperation is None

    def test_empty_references_become_none(self):
        operation = Operation(idcontactcotisant=0, idcomptedestination="", idcontactpercepteur="0")
        assert operation.idcontactcotisant is None
        assert operation.idcomptedestination is None
        assert operation.idcontactpercepteur is None

    def test_labels(self):
        operation = Operation(idtypeoperation=12, moyenpaiement=2)
        assert operation.type_label == "Transfert vers compte"
        assert operation.moyen_paiement_label == "Chèque"
        assert Operation(idtypeoperation=77).type_label == "Inconnu"


@pytest.mark.unit
class TestContact:
    """Contacts et formulaire de contact."""

    def test_flags_and_roles(self):
        contact = Contact(idcontact=5, prenom="Sara", nom="Haddad", agentrecette=True, membrecotisant=None)
        assert contact.agentrecette == 1
        assert contact.membrecotisant == 0
        assert contact.is_percepteur is True
        assert contact.is_cotisant is False
        assert contact.full_name == "Sara Haddad"

    def test_zero_date_and_bad_amount(self):
        contact = Contact(idcontact=6, dateadhesion="0000-00-00", montantcotisation="vingt")
        assert contact.dateadhesion is None
        assert contact.montantcotisation == Decimal("0")

    def test_create_requires_names(self):
        with pytest.raises(ValidationError):
            ContactCreate(prenom=" A ", nom="Diallo", dateadhesion=date(2024, 1, 1))

    def test_create_rejects_invalid_flag(self):
        with pytest.raises(ValidationError):
            ContactCreate(prenom="Amina", nom="Diallo", dateadhesion=date(2024, 1, 1), adherent=2)

    def test_create_strips_names(self):
        contact = ContactCreate(prenom="  Amina ", nom="Diallo", dateadhesion="2024-01-01")
        assert contact.prenom == "Amina"


@pytest.mark.unit
class TestOperationCreate:
    """Formulaire de saisie d'une opération."""

    def _data(self, **overrides):
        data = {
            "libelle": "Don du vendredi",
            "dateoperation": "2024-05-03",
            "idtypeoperation": 2,
            "moyenpaiement": 1,
            "credit": "40",
            "idcontactpercepteur": 3,
            "idcontactcotisant": 4,
        }
        data.update(overrides)
        return data

    def test_valid(self):
        operation = OperationCreate(**self._data())
        assert operation.credit == Decimal("40")
        assert operation.debit == Decimal("0")

    @pytest.mark.parametrize("field,value", [
        ("idtypeoperation", 14),
        ("moyenpaiement", 6),
        ("debit", "-5"),
        ("moiscotisation", 13),
        ("idcontactcotisant", 0),
    ])
    def test_invalid(self, field, value):
        with pytest.raises(ValidationError):
            OperationCreate(**self._data(**{field: value}))


@pytest.mark.unit
class TestCompteBancaireCreate:

    def test_iban_normalized(self):
        compte = CompteBancaireCreate(
            libelle="Compte courant",
            titulaire="Association Al Nour",
            adressetitulaire="12 rue de la Paix",
            domiciliation="Banque Populaire",
            adressedomiciliation="1 place du Marché",
            codebanque="30006",
            codeguichet="00001",
            nrcompte="12345678901",
            clerib="89",
            iban="fr76 3000 6000 0112 3456 7890 189",
            swift="AGRIFRPP",
            bic="AGRIFRPP",
        )
        assert compte.iban == "FR7630006000011234567890189"


@pytest.mark.unit
class TestMiscSchemas:

    def test_commentaire_buffer_decoded(self):
        appel = AppelCotisationEcole(
            idliste=1, nrcontact=1, commentaire={"type": "Buffer", "data": [80, 97, 121, 195, 169]}
        )
        assert appel.commentaire == "Payé"

    def test_paginated_response_aliases(self):
        page = PaginatedResponse[Contact].model_validate({
            "data": [{"idcontact": 1, "prenom": "A", "nom": "B"}],
            "pagination": {"total": 1, "totalPages": 1, "currentPage": 1, "pageSize": 10,
                           "hasNext": False, "hasPrevious": False},
        })
        assert page.pagination.total_pages == 1
        assert page.data[0].idcontact == 1

    def test_password_confirmation(self):
        with pytest.raises(ValidationError):
            PasswordChange(current_password="ancien1", new_password="nouveau1", confirm_password="autre12")
