from __future__ import annotations

import logging
from pathlib import Path

from invoice_panel.core.errors import RenderError
from invoice_panel.core.models.document import InvoiceDocumentModel
from invoice_panel.utils.pdf.core.formatting import CurrencyFormat
from invoice_panel.utils.pdf.renderers.pdf_renderer import invoice_filename, render_invoice_pdf

logger = logging.getLogger(__name__)


def export_invoice_pdf(path: Path, model: InvoiceDocumentModel, currency: CurrencyFormat | None = None) -> Path:
    """
    Render and write the invoice. A directory target gets `invoice-<number>.pdf`.
    The file is only written once rendering has fully succeeded.
    """
    data = render_invoice_pdf(model, currency)
    target = path / invoice_filename(model.invoice_number) if path.is_dir() else path
    try:
        target.write_bytes(data)
    except OSError as exc:
        raise RenderError(f"Could not write {target}: {exc}") from exc
    logger.info("Invoice %s saved to %s", model.invoice_number, target)
    return target
