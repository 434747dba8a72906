"""
Génération du rapport PDF des opérations (A4 paysage).

Le rapport reprend les totaux, un tableau récapitulatif par groupe lorsque des
niveaux de regroupement sont choisis, puis le détail des opérations.
"""

import io
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from alnour.core.logging import log_report_generated
from alnour.models.referentiel import get_moyen_paiement_label, get_month_label
from alnour.schemas.audit import GroupStats
from alnour.schemas.operation import Operation


REPORT_TITLE = "Rapport des opérations"

DETAIL_HEADERS = ["ID", "Contact", "Libellé", "Paiement", "Crédit", "Débit", "Année", "Mois"]
DETAIL_WIDTHS = [10 * mm, 40 * mm, 60 * mm, 30 * mm, 20 * mm, 20 * mm, 20 * mm, 25 * mm]

HEADER_COLOR = colors.Color(66 / 255, 139 / 255, 202 / 255)
STRIPE_COLOR = colors.Color(0.96, 0.96, 0.96)


def format_euros(amount: Optional[Decimal]) -> str:
    """Montant à la française: "1 234,50 €"."""
    value = Decimal(amount or 0).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    formatted = f"{value:,.2f}".replace(",", " ").replace(".", ",")
    return f"{formatted} €"


def _table_style(rows: int) -> TableStyle:
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 2),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
        ("LEFTPADDING", (0, 0), (-1, -1), 2),
        ("RIGHTPADDING", (0, 0), (-1, -1), 2),
    ]
    # Lignes zébrées
    for row in range(2, rows, 2):
        commands.append(("BACKGROUND", (0, row), (-1, row), STRIPE_COLOR))
    return TableStyle(commands)


class OperationsReportGenerator:
    """Construit le PDF à partir d'opérations déjà chargées."""

    def __init__(
        self,
        contact_name: Callable[[Optional[int]], str],
        title: str = REPORT_TITLE,
    ):
        self.contact_name = contact_name
        self.title = title
        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "ReportTitle", parent=styles["Heading1"], fontSize=20, spaceAfter=6
        )
        self.body_style = ParagraphStyle(
            "ReportBody", parent=styles["Normal"], fontSize=12, leading=16
        )
        self.section_style = ParagraphStyle(
            "ReportSection", parent=styles["Heading2"], fontSize=13, spaceBefore=8
        )
        self.cell_style = ParagraphStyle(
            "ReportCell", parent=styles["Normal"], fontSize=8, leading=10
        )

    def _summary(self, operations: Sequence[Operation], generated_at: datetime) -> list:
        total_credit = sum((op.credit for op in operations), Decimal("0"))
        total_debit = sum((op.debit for op in operations), Decimal("0"))
        return [
            Paragraph(escape(self.title), self.title_style),
            Paragraph(f"Date du rapport: {generated_at.strftime('%d/%m/%Y %H:%M')}", self.body_style),
            Spacer(1, 4 * mm),
            Paragraph(f"Total Crédit: {format_euros(total_credit)}", self.body_style),
            Paragraph(f"Total Débit: {format_euros(total_debit)}", self.body_style),
            Paragraph(f"Solde: {format_euros(total_credit - total_debit)}", self.body_style),
            Paragraph(f"Nombre d'opérations: {len(operations)}", self.body_style),
            Spacer(1, 6 * mm),
        ]

    def _groups_table(self, groups: List[GroupStats]) -> list:
        levels = list(groups[0].group_values.keys()) if groups else []
        header = [level.capitalize() for level in levels] + ["Nombre", "Crédit", "Débit", "Solde"]
        rows = [header]
        for stats in groups:
            rows.append(
                [Paragraph(escape(stats.group_values.get(level, "")), self.cell_style) for level in levels]
                + [
                    str(stats.count),
                    format_euros(stats.total_credit),
                    format_euros(stats.total_debit),
                    format_euros(stats.balance),
                ]
            )
        table = Table(rows, repeatRows=1, hAlign="LEFT")
        table.setStyle(_table_style(len(rows)))
        return [Paragraph("Récapitulatif par groupe", self.section_style), table, Spacer(1, 6 * mm)]

    def _detail_table(self, operations: Sequence[Operation]) -> Table:
        rows: list = [DETAIL_HEADERS]
        for op in operations:
            rows.append([
                str(op.idoperation or ""),
                Paragraph(escape(self.contact_name(op.idcontactcotisant)), self.cell_style),
                Paragraph(escape(op.libelle or ""), self.cell_style),
                get_moyen_paiement_label(op.moyenpaiement),
                format_euros(op.credit),
                format_euros(op.debit),
                str(op.anneecotisation or ""),
                get_month_label(op.moiscotisation),
            ])
        table = Table(rows, colWidths=DETAIL_WIDTHS, repeatRows=1, hAlign="LEFT")
        table.setStyle(_table_style(len(rows)))
        return table

    def build(
        self,
        operations: Sequence[Operation],
        groups: Optional[List[GroupStats]] = None,
        generated_at: Optional[datetime] = None,
    ) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=self.title,
        )

        content = self._summary(operations, generated_at or datetime.now())
        if groups:
            content.extend(self._groups_table(groups))
        content.append(self._detail_table(operations))

        doc.build(content)
        return buffer.getvalue()


def generate_operations_report(
    operations: Sequence[Operation],
    contact_name: Callable[[Optional[int]], str],
    groups: Optional[List[GroupStats]] = None,
    generated_at: Optional[datetime] = None,
    title: str = REPORT_TITLE,
) -> bytes:
    """
    Génère le rapport PDF des opérations.

    Args:
        operations: Opérations à lister, dans l'ordre d'affichage
        contact_name: Résolution id contact -> nom affiché
        groups: Statistiques par groupe (tableau récapitulatif), optionnel
        generated_at: Horodatage affiché, maintenant par défaut
        title: Titre du document

    Returns:
        Contenu du fichier PDF
    """
    pdf = OperationsReportGenerator(contact_name, title).build(operations, groups, generated_at)
    group_by = list(groups[0].group_values.keys()) if groups else None
    log_report_generated("operations", len(operations), len(pdf), group_by)
    return pdf


__all__ = ["OperationsReportGenerator", "generate_operations_report", "format_euros"]
