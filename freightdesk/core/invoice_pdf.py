import io
import logging
from xml.sax.saxutils import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from freightdesk.core.config import settings
from freightdesk.schemas.billing import Invoice

logger = logging.getLogger(__name__)


def money(value: float) -> str:
    return f"{settings.CURRENCY} {value:,.0f}"


def render_invoice_pdf(invoice: Invoice) -> bytes:
    """Render a single invoice (header, line items, total, footer) to PDF bytes."""
    buffer = io.BytesIO()
    # Paragraph text is parsed as markup, so free-text fields go through escape()
    doc = SimpleDocTemplate(buffer, pagesize=A4, title=invoice.id)
    styles = getSampleStyleSheet()
    elements = []

    # 1. Header
    elements.append(Paragraph(f"Tax Invoice {invoice.id}", styles['Title']))
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(f"<b>Bill To:</b> {escape(invoice.customer)}", styles['Normal']))
    elements.append(Paragraph(f"<b>Issued:</b> {invoice.created_at.strftime('%Y-%m-%d')}", styles['Normal']))
    elements.append(Paragraph(f"<b>Due:</b> {invoice.due_date.isoformat()}", styles['Normal']))
    elements.append(Paragraph(f"<b>Status:</b> {invoice.status.value}", styles['Normal']))
    elements.append(Spacer(1, 24))

    # 2. Line items
    elements.append(Paragraph("Line Items", styles['Heading2']))
    item_rows = [["Description", "Qty", "Rate", "Amount"]]
    for item in invoice.items:
        item_rows.append([item.desc, f"{item.qty:g}", money(item.rate), money(item.amount)])
    item_rows.append(["", "", "Total", money(invoice.amount_inr)])
    items_table = Table(item_rows, colWidths=[220, 50, 110, 110])
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.navy),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('GRID', (0, 0), (-1, -2), 0.5, colors.grey)
    ]))
    elements.append(items_table)

    if invoice.notes:
        elements.append(Spacer(1, 12))
        elements.append(Paragraph(f"<b>Notes:</b> {escape(invoice.notes)}", styles['Normal']))

    # 3. Footer
    elements.append(Spacer(1, 48))
    elements.append(Paragraph(escape(settings.REPORT_FOOTER), ParagraphStyle(name='Footer', fontSize=8, textColor=colors.grey, alignment=1)))

    doc.build(elements)
    pdf_bytes = buffer.getvalue()
    logger.info(f"Invoice PDF rendered for {invoice.id} ({len(pdf_bytes)} bytes)")
    return pdf_bytes
