"""Generator for QuickBooks invoices and bills."""

import random
from datetime import datetime
from decimal import Decimal

from cashpilot.generators.base import BaseGenerator
from cashpilot.models.financial import QuickBooksBill, QuickBooksInvoice, QuickBooksLine


class QuickBooksGenerator(BaseGenerator):
    """Generate QuickBooks Online invoices (sales) and bills (purchases)."""

    # item name -> (line description, unit price range)
    SALES_ITEMS = {
        "Consulting Services": ("Consulting hours", (100, 200)),
        "Subscription Plan": ("Monthly subscription plan", (99, 299)),
        "Hardware Product": ("Product shipment", (150, 600)),
        "Digital Download": ("Digital download license", (20, 80)),
    }

    # line description -> amount range
    BILL_LINES = {
        "Office supplies": (40, 300),
        "Monthly rent": (1200, 3000),
        "Payroll processing": (3000, 9000),
        "Advertising placement": (200, 1500),
        "Software subscription": (30, 400),
        "Business insurance": (150, 600),
        "Accounting services": (300, 1200),
    }

    def __init__(self, seed: int | None = None, first_doc_number: int = 1001) -> None:
        super().__init__(seed)
        self._next_invoice = first_doc_number
        self._next_bill = first_doc_number

    def generate_invoice(
        self,
        txn_date: datetime,
        customer_id: str | None = None,
        customer_name: str | None = None,
        item_name: str | None = None,
        paid: bool = True,
    ) -> QuickBooksInvoice:
        """Generate an invoice with a single sales-item line.

        Parameters
        ----------
        txn_date : datetime
            Invoice date.
        customer_id : str | None
            CustomerRef value. Random when omitted.
        customer_name : str | None
            CustomerRef name. A company name when omitted.
        item_name : str | None
            Sales item from ``SALES_ITEMS``. Random when omitted.
        paid : bool
            Whether the balance is settled.
        """
        item_name = item_name or random.choice(list(self.SALES_ITEMS))
        description, (low, high) = self.SALES_ITEMS[item_name]
        quantity = random.randint(1, 5)
        unit_price = self.money(low, high)
        amount = unit_price * quantity

        doc_number = self._next_invoice
        self._next_invoice += 1
        return QuickBooksInvoice(
            invoice_id=str(doc_number),
            doc_number=str(doc_number),
            txn_date=txn_date,
            total_amount=amount,
            balance=Decimal("0") if paid else amount,
            customer_id=customer_id or str(self.fake.random_number(digits=4, fix_len=True)),
            customer_name=customer_name or self.fake.company(),
            lines=[
                QuickBooksLine(
                    description=description,
                    amount=amount,
                    item_name=item_name,
                    quantity=quantity,
                    unit_price=unit_price,
                )
            ],
            created_at=txn_date,
            updated_at=txn_date,
        )

    def generate_bill(
        self,
        txn_date: datetime,
        description: str | None = None,
        amount: Decimal | None = None,
        vendor_name: str | None = None,
    ) -> QuickBooksBill:
        """Generate a vendor bill with a single expense line."""
        description = description or random.choice(list(self.BILL_LINES))
        low, high = self.BILL_LINES.get(description, (50, 500))
        amount = amount if amount is not None else self.money(low, high)

        doc_number = self._next_bill
        self._next_bill += 1
        return QuickBooksBill(
            bill_id=str(doc_number),
            doc_number=f"B-{doc_number}",
            txn_date=txn_date,
            total_amount=amount,
            vendor_id=str(self.fake.random_number(digits=4, fix_len=True)),
            vendor_name=vendor_name or self.fake.company(),
            lines=[QuickBooksLine(description=description, amount=amount)],
            created_at=txn_date,
            updated_at=txn_date,
        )
