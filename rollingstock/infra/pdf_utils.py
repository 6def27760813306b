import io
from datetime import date
from typing import Sequence

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from rollingstock.domain.StockItem import StockItem
from rollingstock.logic.expiry.classifier import classify_expiration
from rollingstock.logic.reporting.advisory import Report
from rollingstock.utilities.constants import CATEGORY_LABELS

_STATUS_LABELS = {
    'expired': 'Expired',
    'due_today': 'Due today',
    'due_soon': 'Use soon',
    'ok': 'OK',
    'untracked': '-',
}

_TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#2E7D32")),
    ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
    ("ALIGN", (0,0), (-1,-1), "CENTER"),
    ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
    ("FONTSIZE", (0,0), (-1,0), 11),
    ("BOTTOMPADDING", (0,0), (-1,0), 8),
    ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
])


def generate_pdf_for_report(report: Report, items: Sequence[StockItem], today: date, alert_months: int) -> bytes:
    """Render the advisory report followed by the stock table."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20)

    styles = getSampleStyleSheet()
    elements = [
        Paragraph(f"Stockpile Report – {today.isoformat()}", styles["Title"]),
        Paragraph(f"Overall: {report.grade.value.replace('_', ' ').title()}", styles["Heading2"]),
        Paragraph(report.grade.message, styles["Normal"]),
        Spacer(1, 12),
        Paragraph("Water and food", styles["Heading3"]),
    ]
    for detail in report.coverage:
        line = f"{detail.resource}: {detail.coverage}% ({detail.status})"
        if detail.shortage is not None:
            line += f" – short {detail.shortage} {detail.unit}. {detail.hint}"
        elements.append(Paragraph(line, styles["Normal"]))

    for title, messages in (("Expiry", report.expiry.messages), ("Categories", report.categories.messages)):
        elements.append(Paragraph(title, styles["Heading3"]))
        elements.extend(Paragraph(m, styles["Normal"]) for m in messages)

    elements.append(Paragraph("Recommended actions", styles["Heading3"]))
    elements.extend(Paragraph(f"• {r.message}", styles["Normal"]) for r in report.recommendations)
    elements.append(Spacer(1, 16))

    data = [["Name", "Category", "Qty", "Unit", "Expiry", "Status"]]
    for item in items:
        state = classify_expiration(item, today, alert_months)
        data.append([
            item.name,
            CATEGORY_LABELS.get(item.category, item.category),
            f"{item.quantity:g}",
            item.unit,
            item.expiry or "-",
            _STATUS_LABELS[state.value],
        ])

    table = Table(data, repeatRows=1)
    table.setStyle(_TABLE_STYLE)
    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
