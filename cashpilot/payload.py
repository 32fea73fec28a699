"""Parsing JSON analysis request bodies into typed records, and back.

Validation lives in the pydantic models of :mod:`cashpilot.schemas`. Every
problem in a body is reported together in one :class:`InvalidPayloadError`.
"""

from datetime import datetime
from typing import Any

from pydantic import ValidationError

from cashpilot.exceptions import InvalidPayloadError
from cashpilot.logging import get_logger
from cashpilot.models.financial import (
    AnalysisRequest,
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyOrder,
    Transaction,
)
from cashpilot.schemas import (
    AnalysisRequestIn,
    QuickBooksBillIn,
    QuickBooksInvoiceIn,
    ShopifyOrderIn,
    TransactionIn,
)

logger = get_logger(__name__)


def parse_transaction(data: Any) -> Transaction:
    """Validate one dashboard transaction object.

    Raises
    ------
    pydantic.ValidationError
        Listing every invalid field.
    """
    return TransactionIn.model_validate(data).to_domain()


def parse_shopify_order(data: Any) -> ShopifyOrder:
    """Build an order from Shopify Admin API order JSON."""
    return ShopifyOrderIn.model_validate(data).to_domain()


def parse_quickbooks_invoice(data: Any) -> QuickBooksInvoice:
    """Build an invoice from QuickBooks Online invoice JSON."""
    return QuickBooksInvoiceIn.model_validate(data).to_domain()


def parse_quickbooks_bill(data: Any) -> QuickBooksBill:
    """Build a bill from QuickBooks Online bill JSON."""
    return QuickBooksBillIn.model_validate(data).to_domain()


def _location(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def format_errors(exc: ValidationError) -> list[str]:
    """Render pydantic errors as ``path: message`` lines, e.g. ``transactions[1].date: Field required``."""
    lines = []
    for error in exc.errors():
        where = _location(error["loc"])
        lines.append(f"{where}: {error['msg']}" if where else error["msg"])
    return lines


def parse_request(body: Any) -> AnalysisRequest:
    """Validate a request body into an :class:`AnalysisRequest`.

    Parameters
    ----------
    body : Any
        Decoded JSON: ``{transactions, shopifyOrders?, quickbooksInvoices?,
        quickbooksBills?}``.

    Returns
    -------
    AnalysisRequest
        Typed, sanitized records.

    Raises
    ------
    InvalidPayloadError
        When the body is malformed, listing every problem found.
    """
    try:
        request = AnalysisRequestIn.model_validate(body)
    except ValidationError as exc:
        errors = format_errors(exc)
        logger.warning("Rejected request with %d validation errors", len(errors))
        raise InvalidPayloadError("Invalid request", errors) from exc
    return request.to_domain()


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def dump_transaction(tx: Transaction) -> dict:
    """Render a transaction the way :func:`parse_transaction` reads it."""
    return {
        "id": tx.id,
        "userId": tx.user_id,
        "date": tx.date.isoformat(),
        "amount": str(tx.amount),
        "currency": tx.currency,
        "description": tx.description,
        "category": tx.category,
        "type": tx.type.value,
        "source": tx.source.value,
        "status": tx.status.value,
        "tags": list(tx.tags),
        "sourceId": tx.source_id,
        "createdAt": _iso(tx.created_at),
        "updatedAt": _iso(tx.updated_at),
    }


def dump_shopify_order(order: ShopifyOrder) -> dict:
    """Render an order as Shopify Admin API JSON."""
    customer = None
    if order.customer is not None:
        customer = {
            "id": order.customer.customer_id,
            "email": order.customer.email,
            "first_name": order.customer.first_name,
            "last_name": order.customer.last_name,
        }
    return {
        "id": order.order_id,
        "order_number": order.order_number,
        "created_at": order.created_at.isoformat(),
        "updated_at": _iso(order.updated_at),
        "total_price": str(order.total_price),
        "currency": order.currency,
        "financial_status": order.financial_status.value,
        "customer": customer,
        "line_items": [
            {
                "title": item.title,
                "quantity": item.quantity,
                "price": str(item.price),
                "product_id": item.product_id,
                "total_discount": str(item.total_discount),
            }
            for item in order.line_items
        ],
    }


def _dump_quickbooks_line(line: QuickBooksLine, detail_key: str) -> dict:
    data: dict[str, Any] = {"Description": line.description, "Amount": str(line.amount)}
    if line.item_name is not None:
        detail: dict[str, Any] = {"ItemRef": {"name": line.item_name}}
        if line.quantity is not None:
            detail["Qty"] = line.quantity
        if line.unit_price is not None:
            detail["UnitPrice"] = str(line.unit_price)
        data[detail_key] = detail
    return data


def _dump_meta(created_at: datetime | None, updated_at: datetime | None) -> dict:
    return {"CreateTime": _iso(created_at), "LastUpdatedTime": _iso(updated_at)}


def dump_quickbooks_invoice(invoice: QuickBooksInvoice) -> dict:
    """Render an invoice as QuickBooks Online JSON."""
    return {
        "Id": invoice.invoice_id,
        "DocNumber": invoice.doc_number,
        "TxnDate": invoice.txn_date.isoformat(),
        "TotalAmt": str(invoice.total_amount),
        "Balance": str(invoice.balance),
        "CustomerRef": {"value": invoice.customer_id, "name": invoice.customer_name},
        "Line": [_dump_quickbooks_line(line, "SalesItemLineDetail") for line in invoice.lines],
        "MetaData": _dump_meta(invoice.created_at, invoice.updated_at),
    }


def dump_quickbooks_bill(bill: QuickBooksBill) -> dict:
    """Render a bill as QuickBooks Online JSON."""
    return {
        "Id": bill.bill_id,
        "DocNumber": bill.doc_number,
        "TxnDate": bill.txn_date.isoformat(),
        "TotalAmt": str(bill.total_amount),
        "Balance": str(bill.balance),
        "VendorRef": {"value": bill.vendor_id, "name": bill.vendor_name},
        "Line": [_dump_quickbooks_line(line, "ItemBasedExpenseLineDetail") for line in bill.lines],
        "MetaData": _dump_meta(bill.created_at, bill.updated_at),
    }


def dump_request(request: AnalysisRequest) -> dict:
    """Render a request as the JSON body :func:`parse_request` accepts."""
    return {
        "transactions": [dump_transaction(tx) for tx in request.transactions],
        "shopifyOrders": [dump_shopify_order(order) for order in request.shopify_orders],
        "quickbooksInvoices": [dump_quickbooks_invoice(invoice) for invoice in request.quickbooks_invoices],
        "quickbooksBills": [dump_quickbooks_bill(bill) for bill in request.quickbooks_bills],
    }
