"""Pydantic models for the JSON analysis request body.

Transactions use the dashboard's camelCase keys. Raw Shopify orders keep the
Admin API's snake_case keys and QuickBooks records the Online API's
PascalCase keys. Unknown keys are ignored. Each model converts itself into
the matching dataclass with ``to_domain()``.
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_pascal

from cashpilot.models.financial import (
    AnalysisRequest,
    QuickBooksBill,
    QuickBooksInvoice,
    QuickBooksLine,
    ShopifyCustomer,
    ShopifyFinancialStatus,
    ShopifyLineItem,
    ShopifyOrder,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)

MAX_TRANSACTIONS = 10_000
MAX_RAW_RECORDS = 1_000
MAX_DESCRIPTION_LENGTH = 500
MAX_CATEGORY_LENGTH = 100
MAX_TAGS = 20
CENT = Decimal("0.01")


def sanitize_text(value: Any) -> str:
    """Strip angle brackets and surrounding whitespace."""
    if value is None:
        return ""
    return str(value).replace("<", "").replace(">", "").strip()


def parse_amount(value: Any) -> Decimal:
    """Parse a finite number or numeric string, rounded to cents."""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"invalid amount {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid date {value!r}") from exc
    else:
        raise ValueError(f"invalid date {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _optional_datetime(value: Any) -> datetime | None:
    return parse_datetime(value) if value else None


def _amount_or_zero(value: Any) -> Decimal:
    return parse_amount(value or 0)


class TransactionIn(BaseModel):
    """Transaction as posted by the dashboard."""

    model_config = ConfigDict(alias_generator=to_camel, coerce_numbers_to_str=True)

    id: str = ""
    user_id: str = ""
    date: datetime
    amount: Decimal
    currency: str = Field("USD", min_length=3, max_length=3)
    description: str = Field("", max_length=MAX_DESCRIPTION_LENGTH)
    category: str = Field("", max_length=MAX_CATEGORY_LENGTH)
    type: TransactionType
    source: TransactionSource | None = None
    status: TransactionStatus | None = None
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS)
    source_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    _date = field_validator("date", mode="before")(parse_datetime)
    _amount = field_validator("amount", mode="before")(parse_amount)
    _timestamps = field_validator("created_at", "updated_at", mode="before")(_optional_datetime)

    @field_validator("id", "user_id", "description", "category", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: Any) -> str:
        return sanitize_text(value or "USD").upper()

    @field_validator("type", "source", "status", mode="before")
    @classmethod
    def _lowercase(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value: list[str]) -> list[str]:
        return [tag for tag in map(sanitize_text, value) if tag]

    @field_validator("source_id", mode="before")
    @classmethod
    def _source_id(cls, value: Any) -> Any:
        return sanitize_text(value) if value is not None else None

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id or str(uuid4()),
            user_id=self.user_id,
            date=self.date,
            amount=self.amount,
            currency=self.currency,
            description=self.description,
            category=self.category,
            type=self.type,
            source=self.source or TransactionSource.MANUAL,
            status=self.status or TransactionStatus.COMPLETED,
            tags=self.tags,
            source_id=self.source_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ShopifyCustomerIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str | None = None
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value)


class ShopifyLineItemIn(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = ""
    quantity: int | None = None
    price: Decimal = Decimal("0")
    product_id: str | None = None
    total_discount: Decimal = Decimal("0")

    _amounts = field_validator("price", "total_discount", mode="before")(_amount_or_zero)

    @field_validator("title", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value)

    def to_domain(self) -> ShopifyLineItem:
        return ShopifyLineItem(
            title=self.title or "Unknown Product",
            quantity=self.quantity or 1,
            price=self.price,
            product_id=self.product_id,
            total_discount=self.total_discount,
        )


class ShopifyOrderIn(BaseModel):
    """Order as returned by the Shopify Admin API."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    order_number: int | None = None
    created_at: datetime
    updated_at: datetime | None = None
    total_price: Decimal
    currency: str = "USD"
    financial_status: ShopifyFinancialStatus = ShopifyFinancialStatus.PENDING
    customer: ShopifyCustomerIn | None = None
    line_items: list[ShopifyLineItemIn] = Field(default_factory=list)

    _created = field_validator("created_at", mode="before")(parse_datetime)
    _updated = field_validator("updated_at", mode="before")(_optional_datetime)
    _total = field_validator("total_price", mode="before")(parse_amount)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: Any) -> str:
        return sanitize_text(value or "USD").upper()

    @field_validator("financial_status", mode="before")
    @classmethod
    def _known_status(cls, value: Any) -> ShopifyFinancialStatus:
        # Statuses such as "authorized" or "voided" are treated as not yet paid
        try:
            return ShopifyFinancialStatus(str(value).lower())
        except ValueError:
            return ShopifyFinancialStatus.PENDING

    @field_validator("line_items", mode="before")
    @classmethod
    def _items_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_domain(self) -> ShopifyOrder:
        customer = None
        if self.customer is not None and self.customer.id:
            customer = ShopifyCustomer(
                customer_id=self.customer.id,
                email=self.customer.email,
                first_name=self.customer.first_name,
                last_name=self.customer.last_name,
            )
        return ShopifyOrder(
            order_id=self.id,
            order_number=self.order_number or 0,
            created_at=self.created_at,
            total_price=self.total_price,
            currency=self.currency,
            financial_status=self.financial_status,
            customer=customer,
            line_items=[item.to_domain() for item in self.line_items],
            updated_at=self.updated_at,
        )


class QuickBooksRefIn(BaseModel):
    """``{value, name}`` reference to a customer, vendor or item."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    value: str | None = None
    name: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str | None:
        return sanitize_text(value) or None


class QuickBooksLineDetailIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal)

    item_ref: QuickBooksRefIn | None = None
    qty: int | None = None
    unit_price: Decimal | None = None

    @field_validator("unit_price", mode="before")
    @classmethod
    def _unit_price(cls, value: Any) -> Decimal | None:
        return parse_amount(value) if value is not None else None


class QuickBooksLineIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal)

    description: str = ""
    amount: Decimal = Decimal("0")
    sales_item_line_detail: QuickBooksLineDetailIn | None = None
    item_based_expense_line_detail: QuickBooksLineDetailIn | None = None

    _amount = field_validator("amount", mode="before")(_amount_or_zero)

    @field_validator("description", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value)

    def to_domain(self) -> QuickBooksLine:
        detail = self.sales_item_line_detail or self.item_based_expense_line_detail
        if detail is None:
            return QuickBooksLine(description=self.description, amount=self.amount)
        return QuickBooksLine(
            description=self.description,
            amount=self.amount,
            item_name=detail.item_ref.name if detail.item_ref is not None else None,
            quantity=detail.qty,
            unit_price=detail.unit_price,
        )


class QuickBooksMetaDataIn(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal)

    create_time: datetime | None = None
    last_updated_time: datetime | None = None

    _times = field_validator("create_time", "last_updated_time", mode="before")(_optional_datetime)


class QuickBooksDocumentIn(BaseModel):
    """Fields shared by QuickBooks Online invoices and bills."""

    model_config = ConfigDict(alias_generator=to_pascal, coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    doc_number: str = ""
    txn_date: datetime
    total_amt: Decimal
    balance: Decimal = Decimal("0")
    line: list[QuickBooksLineIn] = Field(default_factory=list)
    meta_data: QuickBooksMetaDataIn = Field(default_factory=QuickBooksMetaDataIn)

    _txn_date = field_validator("txn_date", mode="before")(parse_datetime)
    _total = field_validator("total_amt", mode="before")(parse_amount)
    _balance = field_validator("balance", mode="before")(_amount_or_zero)

    @field_validator("doc_number", mode="before")
    @classmethod
    def _sanitize(cls, value: Any) -> str:
        return sanitize_text(value)

    @field_validator("line", mode="before")
    @classmethod
    def _lines_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("meta_data", mode="before")
    @classmethod
    def _meta_or_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class QuickBooksInvoiceIn(QuickBooksDocumentIn):
    customer_ref: QuickBooksRefIn = Field(default_factory=QuickBooksRefIn)

    def to_domain(self) -> QuickBooksInvoice:
        return QuickBooksInvoice(
            invoice_id=self.id,
            doc_number=self.doc_number or self.id,
            txn_date=self.txn_date,
            total_amount=self.total_amt,
            balance=self.balance,
            customer_id=self.customer_ref.value or None,
            customer_name=self.customer_ref.name,
            lines=[line.to_domain() for line in self.line],
            created_at=self.meta_data.create_time,
            updated_at=self.meta_data.last_updated_time,
        )


class QuickBooksBillIn(QuickBooksDocumentIn):
    vendor_ref: QuickBooksRefIn = Field(default_factory=QuickBooksRefIn)

    def to_domain(self) -> QuickBooksBill:
        return QuickBooksBill(
            bill_id=self.id,
            doc_number=self.doc_number or self.id,
            txn_date=self.txn_date,
            total_amount=self.total_amt,
            balance=self.balance,
            vendor_id=self.vendor_ref.value or None,
            vendor_name=self.vendor_ref.name,
            lines=[line.to_domain() for line in self.line],
            created_at=self.meta_data.create_time,
            updated_at=self.meta_data.last_updated_time,
        )


class AnalysisRequestIn(BaseModel):
    """Request body: ``{transactions, shopifyOrders?, quickbooksInvoices?, quickbooksBills?}``."""

    model_config = ConfigDict(alias_generator=to_camel)

    transactions: list[TransactionIn] = Field(max_length=MAX_TRANSACTIONS)
    shopify_orders: list[ShopifyOrderIn] = Field(default_factory=list, max_length=MAX_RAW_RECORDS)
    quickbooks_invoices: list[QuickBooksInvoiceIn] = Field(default_factory=list, max_length=MAX_RAW_RECORDS)
    quickbooks_bills: list[QuickBooksBillIn] = Field(default_factory=list, max_length=MAX_RAW_RECORDS)

    @field_validator("shopify_orders", "quickbooks_invoices", "quickbooks_bills", mode="before")
    @classmethod
    def _records_or_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_domain(self) -> AnalysisRequest:
        return AnalysisRequest(
            transactions=[tx.to_domain() for tx in self.transactions],
            shopify_orders=[order.to_domain() for order in self.shopify_orders],
            quickbooks_invoices=[invoice.to_domain() for invoice in self.quickbooks_invoices],
            quickbooks_bills=[bill.to_domain() for bill in self.quickbooks_bills],
        )
