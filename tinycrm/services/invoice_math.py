"""
Derived invoice values.

Pure functions over an already-loaded invoice aggregate (lines with their
products, client company). Nothing here touches the database and nothing is
cached: every call recomputes from the current line/product data.
"""

from decimal import Decimal

ZERO = Decimal("0.00")

MONTHS_PT_BR = {
    1: "Janeiro",
    2: "Fevereiro",
    3: "Março",
    4: "Abril",
    5: "Maio",
    6: "Junho",
    7: "Julho",
    8: "Agosto",
    9: "Setembro",
    10: "Outubro",
    11: "Novembro",
    12: "Dezembro",
}


def _money(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def line_total(line) -> Decimal:
    """Product price times quantity."""
    return _money(line.product.price) * line.quantity


def subtotal(invoice) -> Decimal:
    return sum((line_total(line) for line in invoice.invoice_lines), ZERO)


def total(invoice) -> Decimal:
    """Subtotal minus discount plus penalty."""
    return subtotal(invoice) - _money(invoice.discount) + _money(invoice.penalty)


def identification(invoice) -> str:
    """Sequence number when assigned, otherwise the invoice UUID.

    A number of 0 counts as unassigned.
    """
    if invoice.number:
        return str(invoice.number)
    return str(invoice.uuid)


def display_name(invoice) -> str:
    """E.g. ``AcmeLtda_invoice_20250131``."""
    client_name = "".join((invoice.client.name or "").split())
    return f"{client_name}_invoice_{invoice.issue_date.strftime('%Y%m%d')}"


def due_month_label(invoice) -> str:
    """Portuguese name of the due date's month."""
    return MONTHS_PT_BR[invoice.due_date.month]
