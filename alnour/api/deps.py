"""
Dépendances FastAPI pour l'injection de dépendances.
Gère l'authentification des opérateurs, les rôles et l'accès aux services partagés.
"""

from typing import List

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from alnour.database import get_db
from alnour.core.security import verify_token
from alnour.core.logging import logger
from alnour.models.operator import Operator, OperatorRole
from alnour.services.api_client import AlNourAPIClient
from alnour.services.reference_data import ReferenceDataCache


# Schéma de sécurité Bearer Token
security = HTTPBearer(auto_error=False)


async def get_current_operator(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> Operator:
    """
    Récupère l'opérateur courant à partir du token JWT.

    Raises:
        HTTPException: Si le token est invalide ou l'opérateur introuvable
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token d'authentification invalide ou expiré",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        logger.warning("Tentative d'accès sans token")
        raise credentials_exception

    payload = verify_token(credentials.credentials, token_type="access")
    if payload is None:
        logger.warning("Token invalide ou expiré")
        raise credentials_exception

    operator_id = payload.get("sub")
    if operator_id is None:
        logger.warning("Token sans identifiant opérateur")
        raise credentials_exception

    operator = db.query(Operator).filter(Operator.id == int(operator_id)).first()
    if operator is None:
        logger.warning(f"Opérateur {operator_id} non trouvé")
        raise credentials_exception

    logger.debug(f"Opérateur authentifié: {operator.email}")
    return operator


async def get_current_active_operator(
    current_operator: Operator = Depends(get_current_operator),
) -> Operator:
    """Vérifie que l'opérateur courant est actif."""
    if not current_operator.is_active:
        logger.warning(f"Tentative d'accès par opérateur désactivé: {current_operator.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Compte opérateur désactivé",
        )
    return current_operator


def require_roles(allowed_roles: List[str]):
    """
    Dépendance restreignant l'accès à certains rôles.

    Usage:
        @router.post("/", dependencies=[Depends(require_roles(["admin"]))])
    """
    async def role_checker(
        current_operator: Operator = Depends(get_current_active_operator),
    ) -> Operator:
        if current_operator.role not in allowed_roles:
            logger.warning(
                f"Accès refusé pour {current_operator.email}: "
                f"rôle {current_operator.role} non autorisé"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Accès refusé. Rôles requis: {allowed_roles}",
            )
        return current_operator

    return role_checker


# Dépendances prédéfinies
require_admin = require_roles([OperatorRole.ADMIN.value])
require_writer = require_roles([OperatorRole.ADMIN.value, OperatorRole.GESTIONNAIRE.value])


def get_api_client(request: Request) -> AlNourAPIClient:
    """Client de l'API REST partagé, créé au démarrage de l'application."""
    return request.app.state.api_client


def get_reference_data(request: Request) -> ReferenceDataCache:
    """Cache des données de référence partagé."""
    return request.app.state.reference_data


__all__ = [
    "get_db",
    "get_current_operator",
    "get_current_active_operator",
    "require_roles",
    "require_admin",
    "require_writer",
    "get_api_client",
    "get_reference_data",
    "security",
]
