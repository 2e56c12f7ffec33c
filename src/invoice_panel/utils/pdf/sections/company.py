from __future__ import annotations

from invoice_panel.core.models.document import CompanyProfile, InvoiceDocumentModel
from invoice_panel.utils.pdf.core.drawing import Canvas
from invoice_panel.utils.pdf.core.layout_common import COMPANY_PITCH, COMPANY_SIZE, RIGHT_EDGE_X, TOP_Y


def build_company_lines(company: CompanyProfile) -> list[str]:
    raw = [
        company.name,
        company.address,
        company.phone,
        company.email,
        company.website or "",
        f"NPWP: {company.tax_number}" if company.tax_number else "",
    ]
    return [line for line in raw if line]


def draw_company(canvas: Canvas, model: InvoiceDocumentModel, y: float) -> float:
    line_y = TOP_Y
    for line in build_company_lines(model.company):
        canvas.text_right(line, RIGHT_EDGE_X, line_y, COMPANY_SIZE, "gray")
        line_y += COMPANY_PITCH
    return y
