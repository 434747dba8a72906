"""
Routes d'authentification des opérateurs - Connexion, tokens, mot de passe.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from alnour.database import get_db
from alnour.core.security import (
    create_access_token,
    create_refresh_token,
    verify_password,
    get_password_hash,
    verify_token,
)
from alnour.core.logging import logger
from alnour.config import settings
from alnour.models.operator import Operator, utc_now
from alnour.schemas.common import MessageResponse
from alnour.schemas.operator import (
    OperatorResponse,
    OperatorLogin,
    Token,
    RefreshRequest,
    PasswordChange,
)
from alnour.api.deps import get_current_active_operator


router = APIRouter()


def _issue_tokens(operator: Operator) -> Token:
    return Token(
        access_token=create_access_token(subject=operator.id, role=operator.role),
        refresh_token=create_refresh_token(subject=operator.id),
        token_type="bearer",
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post(
    "/login",
    response_model=Token,
    summary="Connexion opérateur",
)
async def login(
    credentials: OperatorLogin,
    db: Session = Depends(get_db),
) -> Any:
    """
    Authentifie un opérateur et retourne les tokens JWT.
    """
    logger.info(f"Tentative de connexion: {credentials.email}")

    operator = db.query(Operator).filter(Operator.email == credentials.email).first()

    if not operator or not verify_password(credentials.password, operator.hashed_password):
        logger.warning(f"Identifiants incorrects pour: {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou mot de passe incorrect",
        )

    if not operator.is_active:
        logger.warning(f"Compte désactivé: {operator.email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Votre compte a été désactivé",
        )

    operator.last_login = utc_now()
    db.commit()

    logger.info(f"Connexion réussie: {operator.email}")
    return _issue_tokens(operator)


@router.post(
    "/refresh",
    response_model=Token,
    summary="Rafraîchir le token d'accès",
)
async def refresh_token(
    data: RefreshRequest,
    db: Session = Depends(get_db),
) -> Any:
    """Génère une nouvelle paire de tokens à partir du refresh token."""
    payload = verify_token(data.refresh_token, token_type="refresh")

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Refresh token invalide ou expiré",
        )

    operator = db.query(Operator).filter(Operator.id == int(payload.get("sub"))).first()

    if not operator or not operator.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Opérateur non trouvé ou désactivé",
        )

    logger.info(f"Token rafraîchi pour: {operator.email}")
    return _issue_tokens(operator)


@router.get(
    "/me",
    response_model=OperatorResponse,
    summary="Profil de l'opérateur connecté",
)
async def get_me(
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    return current_operator


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Changer le mot de passe",
)
async def change_password(
    password_data: PasswordChange,
    current_operator: Operator = Depends(get_current_active_operator),
    db: Session = Depends(get_db),
) -> Any:
    """Change le mot de passe de l'opérateur connecté."""
    if not verify_password(password_data.current_password, current_operator.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Mot de passe actuel incorrect",
        )

    current_operator.hashed_password = get_password_hash(password_data.new_password)
    db.commit()

    logger.info(f"Mot de passe changé pour: {current_operator.email}")
    return MessageResponse(message="Mot de passe mis à jour avec succès")


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Déconnexion",
)
async def logout(
    current_operator: Operator = Depends(get_current_active_operator),
) -> Any:
    """
    Déconnexion. Les tokens JWT sont supprimés côté client.
    """
    logger.info(f"Déconnexion: {current_operator.email}")
    return MessageResponse(message="Déconnexion réussie")
