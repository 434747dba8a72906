"""
Référentiels fixes de l'association: types d'opérations, moyens de paiement, mois.
Les identifiants numériques sont ceux utilisés par l'API REST.
"""

import enum
from typing import Dict, List, Optional


LIBELLE_INCONNU = "Inconnu"


class TypeOperation(enum.IntEnum):
    """Catégories d'opérations financières."""
    COTISATION_ADHERENT = 1
    DON = 2
    TIRELIRE = 3
    ECOLE_AUTRE = 4
    ECOLE_FRAIS_SCOLARITE = 5
    ECOLE_SALAIRE_PROF = 6
    ACHAT = 7
    LOCATION_SALLE = 8
    SORTIE = 9
    SOLDE_INITIAL = 10
    DEPOT = 11
    TRANSFERT_COMPTE = 12
    ARRETE_COMPTE = 13


class MoyenPaiement(enum.IntEnum):
    """Moyens de paiement acceptés."""
    LIQUIDE = 1
    CHEQUE = 2
    CARTE_BANCAIRE = 3
    VIREMENT = 4
    VIREMENT_BANCAIRE = 5


TYPES_OPERATION_LIBELLES: Dict[int, str] = {
    TypeOperation.COTISATION_ADHERENT: "Cotisation adhérent",
    TypeOperation.DON: "Don",
    TypeOperation.TIRELIRE: "Tirelire",
    TypeOperation.ECOLE_AUTRE: "Ecole - Autre que Frais de scolarité",
    TypeOperation.ECOLE_FRAIS_SCOLARITE: "Ecole - Frais de scolarité",
    TypeOperation.ECOLE_SALAIRE_PROF: "Ecole - Salaire prof.",
    TypeOperation.ACHAT: "Achat",
    TypeOperation.LOCATION_SALLE: "Location salle",
    TypeOperation.SORTIE: "Sortie",
    TypeOperation.SOLDE_INITIAL: "Solde Initial",
    TypeOperation.DEPOT: "Dépôt",
    TypeOperation.TRANSFERT_COMPTE: "Transfert vers compte",
    TypeOperation.ARRETE_COMPTE: "Arrêté de compte",
}

MOYENS_PAIEMENT_LIBELLES: Dict[int, str] = {
    MoyenPaiement.LIQUIDE: "Liquide",
    MoyenPaiement.CHEQUE: "Chèque",
    MoyenPaiement.CARTE_BANCAIRE: "Carte bancaire",
    MoyenPaiement.VIREMENT: "Virement",
    MoyenPaiement.VIREMENT_BANCAIRE: "Virement bancaire",
}

# Noms de mois par locale (1 = janvier)
NOMS_MOIS: Dict[str, List[str]] = {
    "fr": [
        "janvier", "février", "mars", "avril", "mai", "juin",
        "juillet", "août", "septembre", "octobre", "novembre", "décembre",
    ],
    "en": [
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ],
}


def get_type_operation_label(type_id: Optional[int]) -> str:
    """Libellé d'un type d'opération, "Inconnu" si l'identifiant n'existe pas."""
    return TYPES_OPERATION_LIBELLES.get(type_id, LIBELLE_INCONNU)


def get_moyen_paiement_label(moyen_id: Optional[int]) -> str:
    """Libellé d'un moyen de paiement, "Inconnu" si l'identifiant n'existe pas."""
    return MOYENS_PAIEMENT_LIBELLES.get(moyen_id, LIBELLE_INCONNU)


def get_month_name(month: int, locale: str = "fr") -> str:
    """Nom du mois (1-12) dans la locale demandée, en français par défaut."""
    names = NOMS_MOIS.get(locale, NOMS_MOIS["fr"])
    return names[month - 1]


def get_month_label(month: Optional[int]) -> str:
    """Libellé capitalisé d'un mois de cotisation ("Janvier"), vide si hors plage."""
    if not month or not 1 <= month <= 12:
        return ""
    return get_month_name(month).capitalize()


def months_choices() -> List[Dict[str, object]]:
    """Liste des mois pour les sélecteurs du formulaire d'opération."""
    return [{"value": i, "label": get_month_label(i)} for i in range(1, 13)]
