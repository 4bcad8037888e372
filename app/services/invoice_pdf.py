"""
Demonstrativo de taxas (PDF) de uma fatura.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from io import BytesIO
from typing import Iterable, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.core.config import Settings, settings as default_settings
from app.schemas.common import format_cnpj
from app.services.totals import item_sale_brl

logger = logging.getLogger(__name__)

COR_PRIMARIA = colors.HexColor("#059669")
COR_TEXTO = colors.HexColor("#111827")
COR_TEXTO_CLARO = colors.HexColor("#6B7280")

_styles = getSampleStyleSheet()
STYLE_TITULO = ParagraphStyle("Titulo", parent=_styles["Title"], textColor=colors.white, fontSize=20, alignment=0)
STYLE_SUBTITULO = ParagraphStyle("Subtitulo", parent=_styles["Normal"], textColor=colors.white, fontSize=9)
STYLE_CABECALHO_DIR = ParagraphStyle("CabecalhoDir", parent=STYLE_SUBTITULO, alignment=TA_RIGHT, fontSize=10)
STYLE_CORPO = ParagraphStyle("Corpo", parent=_styles["Normal"], textColor=COR_TEXTO, fontSize=9, leading=13)
STYLE_NEGRITO = ParagraphStyle("Negrito", parent=STYLE_CORPO, fontName="Helvetica-Bold", fontSize=10)
STYLE_OBS = ParagraphStyle("Obs", parent=STYLE_CORPO, fontSize=8, textColor=COR_TEXTO_CLARO)


def _num(value, places: int = 2) -> str:
    """1234.5 -> '1.234,50'"""
    text = f"{Decimal(str(value or 0)):,.{places}f}"
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_money(value, currency: str = "BRL") -> str:
    symbol = "US$" if currency == "USD" else "R$"
    return f"{symbol} {_num(value)}"


def _date(value: Optional[datetime]) -> str:
    return (value or datetime.utcnow()).strftime("%d/%m/%Y")


def _header(invoice, operation) -> Table:
    reference = operation.reference_number if operation else "N/A"
    left = [
        Paragraph("DEMONSTRATIVO DE TAXAS", STYLE_TITULO),
        Paragraph("Sistema de Gestão Desembaraço Aduaneiro", STYLE_SUBTITULO),
    ]
    right = [
        Paragraph(f"Fatura: {escape(invoice.invoice_number)}", STYLE_CABECALHO_DIR),
        Paragraph(f"Data: {_date(invoice.created_at)}", STYLE_CABECALHO_DIR),
        Paragraph(f"Ref: {escape(reference)}", STYLE_CABECALHO_DIR),
    ]
    table = Table([[left, right]], colWidths=[120 * mm, 60 * mm])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), COR_PRIMARIA),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
            ]
        )
    )
    return table


def _parties(client) -> Table:
    def row(label: str, value: str) -> list:
        return [Paragraph(f"<b>{label}</b>", STYLE_CORPO), Paragraph(escape(value or "N/A"), STYLE_CORPO)]

    weight = f"(peso: {_num(client.weight)} // m3: N/A)" if client and client.weight else "(peso: N/A // m3: N/A)"
    rows = [
        row("Shipper:", client.shipper if client else ""),
        row("Consignee:", client.consignee if client else ""),
        row("CNPJ:", format_cnpj(client.cnpj if client else None)),
        row("Notify:", (client.notify if client else None) or "Same as cnee"),
        row("BL:", client.bl if client else ""),
        row("Porto:", client.port_route if client else ""),
        ["", Paragraph(weight, STYLE_CORPO)],
    ]
    table = Table(rows, colWidths=[25 * mm, 155 * mm])
    table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP"), ("BOTTOMPADDING", (0, 0), (-1, -1), 1)]))
    return table


def _items_table(items: Iterable, fee_names: dict[int, str], dollar_value) -> Table:
    rate = Decimal(str(dollar_value or 1))
    data = [["TAXAS", "VALOR ORIGINAL", "TAXA", "VALOR EM REAIS"]]
    for item in items:
        applied = _num(rate, 4) if item.currency == "USD" else "1,0000"
        data.append(
            [
                fee_names.get(item.fee_id, "Taxa"),
                format_money(item.value, item.currency),
                applied,
                format_money(item_sale_brl(item, rate)),
            ]
        )

    table = Table(data, colWidths=[70 * mm, 40 * mm, 25 * mm, 45 * mm], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("TEXTCOLOR", (0, 0), (-1, 0), COR_PRIMARIA),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("LINEBELOW", (0, 0), (-1, 0), 0.5, COR_PRIMARIA),
                ("TOPPADDING", (0, 0), (-1, -1), 3),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
            ]
        )
    )
    return table


def _totals_table(invoice, iof_rate_pct: Decimal) -> Table:
    data = [["Valor total", format_money(invoice.total_amount)]]
    iof_row = None
    if invoice.iof_amount and Decimal(str(invoice.iof_amount)) > 0:
        iof_row = len(data)
        data.append([f"IOF {_num(iof_rate_pct, 1)} – (frete + locais Brasil)", format_money(invoice.iof_amount)])
    data.append(["Totalidade", format_money(invoice.final_amount)])

    style = [
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, -1), (-1, -1), 11),
        ("LINEABOVE", (0, -1), (-1, -1), 0.5, COR_TEXTO),
    ]
    if iof_row is not None:
        style.append(("FONTNAME", (0, iof_row), (-1, iof_row), "Helvetica-Oblique"))

    table = Table(data, colWidths=[70 * mm, 40 * mm], hAlign="RIGHT")
    table.setStyle(TableStyle(style))
    return table


def render_invoice_pdf(
    invoice,
    client,
    operation,
    items: Iterable,
    fees: Iterable,
    config: Optional[Settings] = None,
) -> bytes:
    """Gera o demonstrativo e devolve os bytes do PDF."""
    config = config or default_settings
    fee_names = {fee.id: fee.name for fee in fees}
    items = list(items)

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=10 * mm,
        bottomMargin=15 * mm,
        title=f"{invoice.invoice_number}_Demonstrativo",
    )

    story = [
        _header(invoice, operation),
        Spacer(1, 6 * mm),
        _parties(client),
        Spacer(1, 6 * mm),
        _items_table(items, fee_names, invoice.dollar_value),
        Spacer(1, 6 * mm),
        _totals_table(invoice, config.IOF_RATE_PCT),
        Spacer(1, 10 * mm),
        # Dados bancários
        Paragraph("DADOS BANCÁRIOS PARA PAGAMENTO:", STYLE_NEGRITO),
        Paragraph(config.BANK_NAME, STYLE_CORPO),
        Paragraph(f"AG: {config.BANK_AGENCY} / CC: {config.BANK_ACCOUNT}", STYLE_CORPO),
        Paragraph(f"PIX: {config.BANK_PIX}", STYLE_CORPO),
        Spacer(1, 4 * mm),
        Paragraph(config.PAYMENT_INSTRUCTIONS, STYLE_NEGRITO),
    ]

    if invoice.notes:
        story.append(Spacer(1, 4 * mm))
        story.append(Paragraph(f"Obs.: {escape(invoice.notes)}", STYLE_OBS))

    doc.build(story)
    pdf = buffer.getvalue()
    logger.info("PDF da fatura %s gerado (%.1f KB, %s item(ns))", invoice.invoice_number, len(pdf) / 1024, len(items))
    return pdf


def pdf_filename(invoice) -> str:
    return f"{invoice.invoice_number}_Demonstrativo.pdf"
