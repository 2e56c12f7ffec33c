class InvoicePanelError(Exception):
    """Base class for errors raised by the invoicing core."""


class ValidationError(InvoicePanelError):
    """Bad numeric input, unknown status or a record that fails parsing."""


class RenderError(InvoicePanelError):
    """The document model is malformed or the PDF could not be produced."""


class StoreError(InvoicePanelError):
    """A record store operation failed (missing table/record, I/O)."""
