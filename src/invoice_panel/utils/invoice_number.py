from datetime import date

DEFAULT_PREFIX = "INV-"


def format_invoice_number(sequence: int, prefix: str = DEFAULT_PREFIX) -> str:
    """
    Human-readable invoice number: <prefix><yyyymmdd>-<sequence>.
    The sequence is global, so numbers keep increasing across days.
    """
    return f"{prefix}{date.today().strftime('%Y%m%d')}-{sequence:04d}"
