"""
Module core - Fonctionnalités centrales de la console.
Contient la sécurité et le logging.
"""

from .security import (
    create_access_token,
    create_refresh_token,
    verify_password,
    get_password_hash,
    verify_token,
)
from .logging import setup_logging, logger

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "verify_password",
    "get_password_hash",
    "verify_token",
    "setup_logging",
    "logger",
]
