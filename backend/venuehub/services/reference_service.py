# Overview: Human-readable reference codes for invoices and payments.

"""
Reference codes are for display ("INV-1760875200123"). They are built
from the creation time in epoch milliseconds and are not guaranteed unique.
"""

from ..time_utils import epoch_millis


INVOICE_PREFIX = "INV"
TRANSACTION_PREFIX = "TXN"


def make_reference(prefix: str) -> str:
    return f"{prefix}-{epoch_millis()}"


def invoice_number() -> str:
    return make_reference(INVOICE_PREFIX)


def transaction_id() -> str:
    return make_reference(TRANSACTION_PREFIX)
