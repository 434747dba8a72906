"""
Modèle Operator - Comptes des opérateurs de la console.
Seules les informations d'authentification sont stockées localement.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Index,
)

from alnour.database import Base


class OperatorRole(str, enum.Enum):
    """Rôles disponibles pour les opérateurs."""
    ADMIN = "admin"                 # Gère les comptes opérateurs
    GESTIONNAIRE = "gestionnaire"   # Saisie et modification des données
    LECTEUR = "lecteur"             # Consultation et rapports uniquement


def utc_now() -> datetime:
    """Horodatage UTC naïf, comme stocké dans les colonnes DateTime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Operator(Base):
    """
    Opérateur autorisé à se connecter à la console.

    Attributes:
        id: Identifiant unique
        email: Adresse email de connexion (unique)
        hashed_password: Mot de passe hashé (bcrypt)
        first_name: Prénom
        last_name: Nom de famille
        role: Rôle dans la console
        is_active: Compte actif ou non
        last_login: Date de dernière connexion
    """

    __tablename__ = "operators"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)

    role = Column(String(20), default=OperatorRole.LECTEUR.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=utc_now, nullable=False)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)
    last_login = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_operator_email_active", "email", "is_active"),
        Index("idx_operator_role", "role"),
    )

    def __repr__(self) -> str:
        return f"<Operator(id={self.id}, email='{self.email}', role={self.role})>"

    @property
    def full_name(self) -> str:
        """Retourne le nom complet de l'opérateur."""
        return f"{self.first_name} {self.last_name}"
