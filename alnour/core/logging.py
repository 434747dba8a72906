"""
Configuration du système de logging de la console Al Nour.
Utilise Loguru pour un logging structuré et détaillé.
"""

import sys
from pathlib import Path
from typing import Optional, Dict
from loguru import logger


def setup_logging(
    log_level: str = "INFO",
    log_file: str = "logs/alnour.log",
    rotation: str = "10 MB",
    retention: str = "30 days",
) -> None:
    """
    Configure le système de logging de l'application.

    Args:
        log_level: Niveau de log (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Chemin du fichier de log
        rotation: Taille maximale avant rotation
        retention: Durée de rétention des logs
    """
    logger.remove()

    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    file_format = (
        "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
        "{level: <8} | "
        "{name}:{function}:{line} | "
        "{message}"
    )

    logger.add(
        sys.stdout,
        format=log_format,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_file,
        format=file_format,
        level=log_level,
        rotation=rotation,
        retention=retention,
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=True,
    )

    # Fichier séparé pour les erreurs
    error_log = str(log_path.parent / "errors.log")
    logger.add(
        error_log,
        format=file_format,
        level="ERROR",
        rotation=rotation,
        retention=retention,
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=True,
    )

    logger.info("Système de logging initialisé")
    logger.debug(f"Niveau de log: {log_level}")
    logger.debug(f"Fichier de log: {log_file}")


def log_request(
    method: str,
    url: str,
    status_code: int,
    duration_ms: float,
    operator_id: Optional[str] = None,
) -> None:
    """
    Log une requête HTTP reçue par la console.

    Args:
        method: Méthode HTTP (GET, POST, etc.)
        url: Chemin de la requête
        status_code: Code de statut HTTP
        duration_ms: Durée de la requête en millisecondes
        operator_id: ID de l'opérateur connecté (optionnel)
    """
    logger.bind(
        method=method,
        url=url,
        status_code=status_code,
        duration_ms=duration_ms,
        operator_id=operator_id,
    ).info(
        f"{method} {url} - {status_code} ({duration_ms:.2f}ms)"
    )


def log_database_query(
    query: str,
    duration_ms: float,
    params: Optional[Dict] = None,
) -> None:
    """Log une requête SQL avec sa durée."""
    logger.bind(
        query=query[:200],
        duration_ms=duration_ms,
        params=params,
    ).debug(
        f"SQL Query ({duration_ms:.2f}ms): {query[:100]}..."
    )


def log_api_call(
    method: str,
    endpoint: str,
    status_code: Optional[int],
    duration_ms: float,
) -> None:
    """
    Log un appel à l'API REST de l'association.

    Args:
        method: Méthode HTTP
        endpoint: Chemin appelé (sans l'URL de base)
        status_code: Code de retour, None si la connexion a échoué
        duration_ms: Durée de l'appel
    """
    success = status_code is not None and status_code < 400
    level = "debug" if success else "warning"
    getattr(logger.bind(
        method=method,
        endpoint=endpoint,
        status_code=status_code,
        duration_ms=duration_ms,
    ), level)(
        f"API {method} {endpoint} -> {status_code if status_code is not None else 'injoignable'} "
        f"({duration_ms:.2f}ms)"
    )


def log_report_generated(
    report_type: str,
    operations_count: int,
    size_bytes: int,
    group_by: Optional[list] = None,
) -> None:
    """Log la génération d'un rapport PDF."""
    logger.bind(
        report_type=report_type,
        operations_count=operations_count,
        size_bytes=size_bytes,
        group_by=group_by,
    ).info(
        f"Rapport {report_type} généré: {operations_count} opérations, "
        f"{size_bytes} octets"
    )


__all__ = [
    "logger",
    "setup_logging",
    "log_request",
    "log_database_query",
    "log_api_call",
    "log_report_generated",
]
