"""
Base de données locale de la console (comptes opérateurs) avec SQLAlchemy.
Les données de l'association restent dans l'API REST externe.
"""

from contextlib import contextmanager
from typing import Generator
import time

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from alnour.config import settings
from alnour.core.logging import logger, log_database_query


def _engine_options(database_url: str) -> dict:
    """Options du moteur selon le dialecte."""
    if database_url.startswith("sqlite"):
        # SQLite (tests et développement local): une seule connexion partagée
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    **_engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


@event.listens_for(engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Enregistre le temps de début de la requête."""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Calcule et log la durée de la requête."""
    total_time = time.time() - conn.info["query_start_time"].pop(-1)
    duration_ms = total_time * 1000

    if duration_ms > 10 or settings.DEBUG:
        log_database_query(
            query=statement,
            duration_ms=duration_ms,
            params=parameters if isinstance(parameters, dict) else None,
        )


def get_db() -> Generator[Session, None, None]:
    """
    Générateur de session de base de données pour l'injection de dépendances.

    Yields:
        Session SQLAlchemy active
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Erreur lors de l'utilisation de la session: {e}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager pour utilisation hors FastAPI (démarrage, scripts).

    Usage:
        with get_db_context() as db:
            operators = db.query(Operator).all()
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        logger.error(f"Erreur de transaction: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """
    Crée les tables de la console.
    En production, utiliser Alembic pour les migrations.
    """
    # Enregistre les modèles auprès de Base
    import alnour.models  # noqa: F401

    logger.info("Initialisation de la base de données...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables créées avec succès")


def check_db_connection() -> bool:
    """
    Vérifie que la connexion à la base de données fonctionne.

    Returns:
        True si la connexion est établie, False sinon
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Impossible de se connecter à la base de données: {e}")
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_db",
    "get_db_context",
    "init_db",
    "check_db_connection",
]
