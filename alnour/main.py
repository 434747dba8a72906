"""
Console Al Nour - Point d'entrée principal de l'application.
Back-office de gestion des membres, cotisations et opérations de l'association.
"""

import time
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from alnour.config import settings
from alnour.database import check_db_connection, get_db_context, init_db
from alnour.core.logging import setup_logging, logger, log_request
from alnour.core.security import decode_token_unsafe, get_password_hash
from alnour.models.operator import Operator, OperatorRole
from alnour.services.api_client import AlNourAPIClient, AlNourAPIError
from alnour.services.reference_data import ReferenceDataCache
from alnour.api.v1.router import api_router


# Configuration du logging au démarrage
setup_logging(
    log_level="DEBUG" if settings.DEBUG else "INFO",
    log_file=settings.LOG_FILE,
)


def bootstrap_admin() -> None:
    """
    Crée le premier administrateur si la table des opérateurs est vide
    et que les identifiants sont fournis par la configuration.
    """
    if not settings.BOOTSTRAP_ADMIN_EMAIL or not settings.BOOTSTRAP_ADMIN_PASSWORD:
        return

    with get_db_context() as db:
        if db.query(Operator).count() > 0:
            return
        db.add(Operator(
            email=settings.BOOTSTRAP_ADMIN_EMAIL,
            hashed_password=get_password_hash(settings.BOOTSTRAP_ADMIN_PASSWORD),
            first_name="Admin",
            last_name="Al Nour",
            role=OperatorRole.ADMIN.value,
            is_active=True,
        ))
    logger.info(f"Administrateur initial créé: {settings.BOOTSTRAP_ADMIN_EMAIL}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestionnaire de cycle de vie de l'application.
    Exécuté au démarrage et à l'arrêt.
    """
    logger.info("=" * 60)
    logger.info(f"Démarrage de {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environnement: {settings.ENVIRONMENT}")
    logger.info(f"API Al Nour: {settings.ALNOUR_API_URL}")
    logger.info("=" * 60)

    if not check_db_connection():
        logger.error("Impossible de se connecter à la base de données!")
    else:
        if settings.DEBUG:
            # En développement, les tables sont créées sans passer par Alembic
            init_db()
        bootstrap_admin()

    # Client et cache partagés; les données de référence sont chargées à la première demande
    app.state.api_client = AlNourAPIClient()
    app.state.reference_data = ReferenceDataCache(app.state.api_client)

    logger.info("Application prête à recevoir des requêtes")

    yield

    logger.info("Arrêt de l'application...")
    await app.state.api_client.aclose()
    logger.info("Application arrêtée proprement")


# Création de l'application FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    description="""
    ## Console Al Nour - Gestion de l'association

    ### Fonctionnalités principales:

    * **Contacts** - Membres, fondateurs, cotisants, donateurs, agents de recette
    * **Ecole** - Années scolaires, inscriptions, cotisations de l'école
    * **Opérations** - Saisie des crédits et débits, comptes bancaires
    * **Audit** - Regroupements par mois, cotisant, type ou compte, rapport PDF
    * **Tableau de bord** - Effectifs et montants encaissés

    ### Rôles:

    * **Lecteur** - Consultation et rapports
    * **Gestionnaire** - Saisie et modification des données
    * **Admin** - Gestion des opérateurs

    ### Documentation API:

    * Swagger UI: `/docs`
    * ReDoc: `/redoc`
    """,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_tags=[
        {"name": "Authentification", "description": "Connexion des opérateurs, tokens JWT"},
        {"name": "Opérateurs", "description": "Comptes de la console"},
        {"name": "Contacts", "description": "Membres et donateurs de l'association"},
        {"name": "Ecole", "description": "Années scolaires et adhérents"},
        {"name": "Opérations", "description": "Crédits et débits"},
        {"name": "Cotisations", "description": "Appels de cotisation"},
        {"name": "Comptes bancaires", "description": "Comptes de l'association"},
        {"name": "Données de référence", "description": "Listes partagées par les formulaires"},
        {"name": "Audit", "description": "Regroupements, statistiques et rapport PDF"},
        {"name": "Tableau de bord", "description": "Indicateurs"},
    ],
)


# Configuration CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware de logging des requêtes
@app.middleware("http")
async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Middleware pour logger toutes les requêtes HTTP.
    """
    start_time = time.time()

    operator_id = None
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        payload = decode_token_unsafe(auth_header[7:])
        if payload:
            operator_id = payload.get("sub")

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        url=str(request.url.path),
        status_code=response.status_code,
        duration_ms=duration_ms,
        operator_id=operator_id,
    )

    response.headers["X-Process-Time"] = f"{duration_ms:.2f}ms"

    return response


# Gestionnaire d'erreurs de validation
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Gestionnaire personnalisé pour les erreurs de validation Pydantic.
    """
    logger.warning(f"Erreur de validation: {exc.errors()}")

    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(x) for x in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Erreur de validation des données",
            "errors": errors,
        },
    )


# Gestionnaire d'erreurs de l'API REST de l'association
@app.exception_handler(AlNourAPIError)
async def alnour_api_exception_handler(
    request: Request,
    exc: AlNourAPIError
) -> JSONResponse:
    """
    Les échecs de l'API externe sont renvoyés en 502 avec le message à afficher.
    """
    logger.error(f"Erreur API Al Nour sur {exc.endpoint}: {exc.message}")

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": exc.message,
            "status_code": exc.status_code,
        },
    )


# Gestionnaire d'erreurs SQLAlchemy
@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    logger.error(f"Erreur SQLAlchemy: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Erreur de base de données",
            "message": "Une erreur est survenue lors de l'accès aux données",
        },
    )


# Gestionnaire d'erreurs génériques
@app.exception_handler(Exception)
async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    logger.opt(exception=exc).error(f"Erreur non gérée: {exc}")

    if settings.DEBUG:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Une erreur interne est survenue",
        },
    )


# Inclusion du routeur API v1
app.include_router(api_router, prefix="/api/v1")


# Route de santé
@app.get(
    "/health",
    tags=["Système"],
    summary="Vérification de l'état de l'application",
)
async def health_check(request: Request):
    """
    Endpoint de health check pour les load balancers et monitoring.
    """
    db_status = "ok" if check_db_connection() else "error"
    reference = getattr(request.app.state, "reference_data", None)

    return {
        "status": "ok" if db_status == "ok" else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": db_status,
        "reference_data": {
            "loaded": bool(reference and reference.loaded),
            "error": reference.error if reference else None,
        },
    }


# Route racine
@app.get("/", tags=["Système"])
async def root():
    """
    Point d'entrée racine de l'API.
    """
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "Console de gestion de l'association Al Nour",
        "docs": "/docs" if settings.DEBUG else "Documentation désactivée en production",
        "health": "/health",
        "api": "/api/v1",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "alnour.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
    )
