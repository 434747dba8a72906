"""
Module de sécurité de la console Al Nour.
Gestion de l'authentification JWT et du hashage des mots de passe des opérateurs.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Dict, Union

import bcrypt
from jose import JWTError, jwt

from alnour.config import settings
from alnour.core.logging import logger


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Vérifie si un mot de passe en clair correspond au hash stocké.

    Args:
        plain_password: Mot de passe en clair
        hashed_password: Hash du mot de passe stocké

    Returns:
        True si le mot de passe est correct, False sinon
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError as e:
        logger.error(f"Hash de mot de passe invalide: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash un mot de passe pour le stockage."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def _encode(claims: Dict[str, Any]) -> str:
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    subject: Union[str, int],
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Crée un token JWT d'accès.

    Args:
        subject: Identifiant de l'opérateur
        role: Rôle de l'opérateur (admin, gestionnaire, lecteur)
        expires_delta: Durée de validité du token

    Returns:
        Token JWT encodé
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    token = _encode({
        "sub": str(subject),
        "role": role,
        "exp": expire,
        "iat": now,
        "type": "access",
    })
    logger.debug(f"Token d'accès créé pour l'opérateur {subject} avec rôle {role}")
    return token


def create_refresh_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Crée un token JWT de rafraîchissement."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))

    return _encode({
        "sub": str(subject),
        "exp": expire,
        "iat": now,
        "type": "refresh",
    })


def verify_token(token: str, token_type: str = "access") -> Optional[Dict[str, Any]]:
    """
    Vérifie et décode un token JWT.

    Args:
        token: Token JWT à vérifier
        token_type: Type de token attendu (access ou refresh)

    Returns:
        Payload du token si valide, None sinon
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError as e:
        logger.warning(f"Erreur de vérification du token JWT: {e}")
        return None

    if payload.get("type") != token_type:
        logger.warning(f"Type de token invalide: attendu {token_type}, reçu {payload.get('type')}")
        return None

    return payload


def decode_token_unsafe(token: str) -> Optional[Dict[str, Any]]:
    """
    Décode un token sans vérifier son expiration (journalisation uniquement).
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"verify_exp": False}
        )
    except JWTError:
        return None


__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "decode_token_unsafe",
]
