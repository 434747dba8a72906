"""
Regroupement hiérarchique des opérations pour les vues d'audit.

Les opérations sont réparties par mois, cotisant, type ou compte bancaire,
dans l'ordre des niveaux demandés. Chaque groupe porte ses opérations, le
total des crédits et des débits, et ses sous-groupes s'il reste des niveaux.
"""

import unicodedata
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from alnour.models.referentiel import get_month_name, get_type_operation_label
from alnour.schemas.audit import GroupLevel, GroupStats, OperationGroup
from alnour.schemas.operation import Operation
from alnour.services.reference_data import CONTACT_INCONNU, COMPTE_INCONNU, ReferenceDataCache


SANS_ADHERENT = "Sans adhérent"
SANS_COMPTE = "Sans compte"
SANS_DATE = "Sans date"

NameLookup = Callable[[int], Optional[str]]
LevelLike = Union[GroupLevel, str]


def collation_key(text: str):
    """Clé de tri proche d'une comparaison locale: sans accents ni casse."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text)


def _sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, Decimal("0"))


class OperationGrouper:
    """
    Regroupe des opérations à l'aide des fonctions de résolution injectées.

    Args:
        contact_name: id contact -> "prénom nom" (ou None si inconnu)
        bank_account_name: id compte -> libellé (ou None si inconnu)
        type_label: id type d'opération -> libellé
        locale: langue des noms de mois ("fr" ou "en")
    """

    def __init__(
        self,
        contact_name: Optional[NameLookup] = None,
        bank_account_name: Optional[NameLookup] = None,
        type_label: Callable[[Optional[int]], str] = get_type_operation_label,
        locale: str = "fr",
    ):
        self.contact_name = contact_name or (lambda _id: None)
        self.bank_account_name = bank_account_name or (lambda _id: None)
        self.type_label = type_label
        self.locale = locale

    @classmethod
    def from_reference(cls, reference: ReferenceDataCache, locale: str = "fr") -> "OperationGrouper":
        """Résout les noms à partir du cache des données de référence."""
        def contact_name(contact_id: int) -> Optional[str]:
            contact = reference.get_contact(contact_id)
            return contact.full_name if contact else None

        def bank_account_name(account_id: int) -> Optional[str]:
            account = reference.get_bank_account(account_id)
            return account.libelle if account and account.libelle else None

        return cls(contact_name, bank_account_name, locale=locale)

    def key_for(self, operation: Operation, level: GroupLevel) -> str:
        """Clé d'affichage de l'opération pour un niveau de regroupement."""
        if level is GroupLevel.MONTH:
            if operation.dateoperation is None:
                return SANS_DATE
            month = get_month_name(operation.dateoperation.month, self.locale)
            return f"{month} {operation.dateoperation.year}"

        if level is GroupLevel.CONTACT:
            if not operation.idcontactcotisant:
                return SANS_ADHERENT
            return self.contact_name(operation.idcontactcotisant) or CONTACT_INCONNU

        if level is GroupLevel.TYPE:
            return self.type_label(operation.idtypeoperation)

        if not operation.idcomptedestination:
            return SANS_COMPTE
        return self.bank_account_name(operation.idcomptedestination) or COMPTE_INCONNU

    def group(
        self,
        operations: Sequence[Operation],
        group_levels: Sequence[LevelLike],
    ) -> List[OperationGroup]:
        """
        Construit l'arbre des groupes.

        Sans niveau de regroupement, la liste retournée est vide et
        l'appelant affiche les opérations à plat.
        """
        levels = [GroupLevel(level) for level in group_levels]
        return self._group(list(operations), levels)

    def _group(self, operations: List[Operation], levels: List[GroupLevel]) -> List[OperationGroup]:
        if not levels:
            return []

        level, remaining = levels[0], levels[1:]
        buckets: Dict[str, List[Operation]] = {}
        for operation in operations:
            buckets.setdefault(self.key_for(operation, level), []).append(operation)

        groups = [
            OperationGroup(
                key=key,
                level=level,
                operations=members,
                total_credit=_sum(op.credit for op in members),
                total_debit=_sum(op.debit for op in members),
                count=len(members),
                children=self._group(members, remaining) if remaining else None,
            )
            for key, members in buckets.items()
        ]
        groups.sort(key=lambda g: collation_key(g.key))
        return groups

    def stats(
        self,
        operations: Sequence[Operation],
        group_levels: Sequence[LevelLike],
    ) -> List[GroupStats]:
        """
        Statistiques à plat: une ligne par groupe feuille.
        Sans niveau de regroupement, une seule ligne couvre toutes les opérations.
        """
        levels = [GroupLevel(level) for level in group_levels]
        if not levels:
            return [self._stats_row({}, list(operations))]

        rows: List[GroupStats] = []

        def walk(groups: List[OperationGroup], values: Dict[str, str]) -> None:
            for group in groups:
                path = {**values, group.level.value: group.key}
                if group.children:
                    walk(group.children, path)
                else:
                    rows.append(self._stats_row(path, group.operations))

        walk(self._group(list(operations), levels), {})
        return rows

    @staticmethod
    def _stats_row(values: Dict[str, str], operations: List[Operation]) -> GroupStats:
        total_credit = _sum(op.credit for op in operations)
        total_debit = _sum(op.debit for op in operations)
        return GroupStats(
            group_values=values,
            count=len(operations),
            total_credit=total_credit,
            total_debit=total_debit,
            balance=total_credit - total_debit,
        )


def group_operations(
    operations: Sequence[Operation],
    group_levels: Sequence[LevelLike],
    contact_name: Optional[NameLookup] = None,
    bank_account_name: Optional[NameLookup] = None,
    type_label: Callable[[Optional[int]], str] = get_type_operation_label,
    locale: str = "fr",
) -> List[OperationGroup]:
    """Raccourci fonctionnel de `OperationGrouper.group`."""
    grouper = OperationGrouper(contact_name, bank_account_name, type_label, locale)
    return grouper.group(operations, group_levels)


def compute_stats(
    operations: Sequence[Operation],
    group_levels: Sequence[LevelLike],
    contact_name: Optional[NameLookup] = None,
    bank_account_name: Optional[NameLookup] = None,
    type_label: Callable[[Optional[int]], str] = get_type_operation_label,
    locale: str = "fr",
) -> List[GroupStats]:
    """Raccourci fonctionnel de `OperationGrouper.stats`."""
    grouper = OperationGrouper(contact_name, bank_account_name, type_label, locale)
    return grouper.stats(operations, group_levels)


__all__ = [
    "OperationGrouper",
    "group_operations",
    "compute_stats",
    "collation_key",
    "SANS_ADHERENT",
    "SANS_COMPTE",
    "SANS_DATE",
]
