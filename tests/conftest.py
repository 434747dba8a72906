"""
Configuration globale pytest pour la console Al Nour.
Fixtures partagées entre tests unitaires et tests d'intégration.

L'API REST de l'association est simulée par `FakeAlNourAPI`, branchée sur le
vrai client httpx via `httpx.MockTransport`. La base des opérateurs est une
base SQLite en mémoire.
"""

import json
import os
import tempfile
from typing import Any, Dict, Generator, List, Optional

import httpx
import pytest

# Environnement de test, avant tout import de l'application
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_FILE"] = os.path.join(tempfile.mkdtemp(prefix="alnour-logs-"), "alnour.log")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ.pop("BOOTSTRAP_ADMIN_EMAIL", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from alnour.api.deps import get_api_client, get_reference_data  # noqa: E402
from alnour.core.security import create_access_token, get_password_hash  # noqa: E402
from alnour.database import Base, SessionLocal, engine  # noqa: E402
from alnour.main import app  # noqa: E402
from alnour.models.operator import Operator, OperatorRole  # noqa: E402
from alnour.services.api_client import AlNourAPIClient  # noqa: E402
from alnour.services.reference_data import ReferenceDataCache  # noqa: E402


API_BASE_URL = "http://alnour.test/api"
PASSWORD = "secret123"


# ============================================
# Jeu de données de l'API simulée
# ============================================

def contact_row(idcontact: int, prenom: str, nom: str, **flags: Any) -> Dict[str, Any]:
    row = {
        "idcontact": idcontact,
        "prenom": prenom,
        "nom": nom,
        "alias": None,
        "adherent": 0,
        "membrefondateur": 0,
        "membrecotisant": 0,
        "donateur": 0,
        "agentrecette": 0,
        "dateadhesion": "2020-09-01T00:00:00.000Z",
        "montantcotisation": "20.00",
        "idagentrecetteref": None,
    }
    row.update(flags)
    return row


def operation_row(
    idoperation: int,
    dateoperation: Optional[str],
    credit: Any = "0",
    debit: Any = "0",
    idtypeoperation: int = 1,
    idcontactcotisant: Any = None,
    idcomptedestination: Any = None,
    **extra: Any,
) -> Dict[str, Any]:
    row = {
        "idoperation": idoperation,
        "libelle": f"Opération {idoperation}",
        "dateoperation": dateoperation,
        "idtypeoperation": idtypeoperation,
        "refoperation": None,
        "moyenpaiement": 1,
        "refcheque": None,
        "credit": credit,
        "debit": debit,
        "idcontactpercepteur": 3,
        "idcontactcotisant": idcontactcotisant,
        "membrecotisant": 1,
        "anneecotisation": 2024,
        "moiscotisation": 1,
        "idcomptedestination": idcomptedestination,
    }
    row.update(extra)
    return row


def default_dataset() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "contacts": [
            contact_row(1, "Amina", "Diallo", adherent=1, membrecotisant=1),
            contact_row(2, "Karim", "Benali", adherent=1, membrecotisant=1, donateur=1),
            contact_row(3, "Fatou", "Sow", agentrecette=1),
            contact_row(4, "Yacine", "Ould", donateur=1),
        ],
        "comptesbancaires": [
            {"idcompte": 1, "libelle": "Compte courant", "iban": "FR7630006000011234567890189"},
            {"idcompte": 2, "libelle": "Livret école", "iban": "FR7630006000011234567890190"},
        ],
        "operations": [
            operation_row(1, "2024-01-10T00:00:00.000Z", credit="100.00",
                          idcontactcotisant=1, idcomptedestination=1),
            operation_row(2, "2024-01-20T00:00:00.000Z", credit="50.00",
                          idtypeoperation=2, idcontactcotisant=2, idcomptedestination=1),
            operation_row(3, "2024-02-05T00:00:00.000Z", debit="30.00",
                          idtypeoperation=7, idcontactcotisant=0, idcomptedestination=2),
        ],
        "appelcotisations": [
            {"idliste": 1, "nrcontact": 1, "idcontact": 1, "montantcotisation": "20.00",
             "datereceptioncotisation": "2024-01-05", "signatureagent": "FS",
             "signaturecotisant": "AD"},
            {"idliste": 2, "nrcontact": 2, "idcontact": 2, "montantcotisation": "20.00",
             "datereceptioncotisation": None, "signatureagent": "FS",
             "signaturecotisant": "KB"},
            {"idliste": 3, "nrcontact": 1, "idcontact": 1, "montantcotisation": "25.00",
             "datereceptioncotisation": "2024-03-05", "signatureagent": "FS",
             "signaturecotisant": "AD"},
        ],
        "appelcotisationsecole": [
            {"idliste": 1, "nrcontact": 2, "idcontact": 2, "montantcotisation": "150.00",
             "datereceptioncotisation": "2024-09-15", "signatureagent": "FS",
             "commentaire": {"type": "Buffer", "data": [80, 97, 121, 195, 169]}},
        ],
        "adherents": [
            {"idcontact": 2, "prenom": "Karim", "nom": "Benali", "anneescolaire": 2024, "nbenfants": 2},
        ],
        "annees": [
            {"annee": 2024, "libelle": "2024-2025", "montantcotisation": "150.00"},
        ],
    }


class FakeAlNourAPI:
    """
    API REST simulée: listes paginées, création et modification.

    `failures` associe un nom de ressource à un code HTTP renvoyé en erreur.
    `requests` garde la trace des appels reçus.
    """

    def __init__(self, data: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.data = data if data is not None else default_dataset()
        self.failures: Dict[str, int] = {}
        self.requests: List[httpx.Request] = []

    def calls(self, method: str, resource: str) -> List[httpx.Request]:
        return [
            r for r in self.requests
            if r.method == method and r.url.path.split("/")[2] == resource
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        parts = request.url.path.strip("/").split("/")  # ["api", resource, (id)]
        resource = parts[1]

        if resource in self.failures:
            return httpx.Response(self.failures[resource], json={"error": "boom"})
        if resource not in self.data:
            return httpx.Response(404, json={"error": "not found"})

        if request.method == "GET":
            return httpx.Response(200, json=self._page(resource, request.url.params))

        payload = json.loads(request.content or b"{}")
        if request.method == "POST":
            return httpx.Response(201, json={"id": 99, **payload})
        return httpx.Response(200, json={"id": int(parts[2]), **payload})

    def _page(self, resource: str, params: httpx.QueryParams) -> Dict[str, Any]:
        rows = self.data[resource]
        page = int(params.get("page", 1))
        limit = int(params.get("limit", 10))
        start = (page - 1) * limit
        total_pages = max(1, -(-len(rows) // limit))
        return {
            "data": rows[start:start + limit],
            "pagination": {
                "total": len(rows),
                "totalPages": total_pages,
                "currentPage": page,
                "pageSize": limit,
                "hasNext": page < total_pages,
                "hasPrevious": page > 1,
            },
        }


# ============================================
# Client API et cache
# ============================================

@pytest.fixture
def fake_api() -> FakeAlNourAPI:
    return FakeAlNourAPI()


@pytest.fixture
def api_client(fake_api: FakeAlNourAPI) -> AlNourAPIClient:
    return AlNourAPIClient(
        base_url=API_BASE_URL,
        token="Bearer api-token",
        transport=httpx.MockTransport(fake_api.handler),
    )


@pytest.fixture
def reference(api_client: AlNourAPIClient) -> ReferenceDataCache:
    return ReferenceDataCache(api_client)


# ============================================
# Base de données des opérateurs
# ============================================

@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Session sur la base SQLite en mémoire, vidée après chaque test."""
    import alnour.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.query(Operator).delete()
    session.commit()
    session.close()


def _create_operator(db: Session, email: str, role: OperatorRole, is_active: bool = True) -> Operator:
    operator = Operator(
        email=email,
        hashed_password=get_password_hash(PASSWORD),
        first_name="Test",
        last_name=role.value.capitalize(),
        role=role.value,
        is_active=is_active,
    )
    db.add(operator)
    db.commit()
    db.refresh(operator)
    return operator


@pytest.fixture
def admin(db_session: Session) -> Operator:
    return _create_operator(db_session, "admin@alnour-asso.fr", OperatorRole.ADMIN)


@pytest.fixture
def gestionnaire(db_session: Session) -> Operator:
    return _create_operator(db_session, "gestion@alnour-asso.fr", OperatorRole.GESTIONNAIRE)


@pytest.fixture
def lecteur(db_session: Session) -> Operator:
    return _create_operator(db_session, "lecteur@alnour-asso.fr", OperatorRole.LECTEUR)


@pytest.fixture
def inactive_operator(db_session: Session) -> Operator:
    return _create_operator(
        db_session, "inactif@alnour-asso.fr", OperatorRole.GESTIONNAIRE, is_active=False
    )


def auth_headers(operator: Operator) -> Dict[str, str]:
    token = create_access_token(subject=operator.id, role=operator.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin: Operator) -> Dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def writer_headers(gestionnaire: Operator) -> Dict[str, str]:
    return auth_headers(gestionnaire)


@pytest.fixture
def reader_headers(lecteur: Operator) -> Dict[str, str]:
    return auth_headers(lecteur)


# ============================================
# Client HTTP de test
# ============================================

@pytest.fixture
def client(
    db_session: Session,
    api_client: AlNourAPIClient,
    reference: ReferenceDataCache,
) -> Generator[TestClient, None, None]:
    """TestClient FastAPI branché sur l'API simulée."""
    app.dependency_overrides[get_api_client] = lambda: api_client
    app.dependency_overrides[get_reference_data] = lambda: reference

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
