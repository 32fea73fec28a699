"""Keyword categorizer for transaction descriptions.

Each transaction type has an ordered table of ``(keyword, category)`` pairs.
Matching is a case-insensitive substring test, and the table order decides
which category is suggested first.
"""

from collections import Counter
from typing import Iterable

from cashpilot.logging import get_logger
from cashpilot.models.financial.enums import TransactionType

logger = get_logger(__name__)

KeywordTable = list[tuple[str, str]]


def _expand(groups: list[tuple[str, list[str]]]) -> KeywordTable:
    return [(keyword, category) for category, keywords in groups for keyword in keywords]


INCOME_KEYWORDS: KeywordTable = _expand(
    [
        ("Client Services", ["client", "consulting", "service", "project", "work", "contract"]),
        ("Product Sales", ["sale", "product", "item", "merchandise", "goods"]),
        ("Subscription", ["subscription", "recurring", "monthly", "annual", "membership"]),
        ("Investment", ["investment", "dividend", "interest", "return", "profit"]),
        ("Refund", ["refund", "return", "credit", "reimbursement"]),
        ("Other Income", ["commission", "bonus", "tip", "gift"]),
    ]
)

EXPENSE_KEYWORDS: KeywordTable = _expand(
    [
        ("Technology", ["software", "hardware", "computer", "laptop", "phone", "internet", "hosting"]),
        ("Marketing", ["marketing", "advertising", "promotion", "social media", "seo", "ppc"]),
        ("Office & Supplies", ["office", "supplies", "stationery", "paper", "ink", "printer"]),
        ("Travel", ["travel", "flight", "hotel", "transportation", "uber", "lyft", "gas"]),
        ("Meals", ["lunch", "dinner", "breakfast", "food", "restaurant", "coffee"]),
        ("Professional Services", ["legal", "accounting", "consultant", "freelancer", "contractor"]),
        ("Insurance", ["insurance", "liability", "health", "property"]),
        ("Rent", ["rent", "lease", "office space", "warehouse"]),
        ("Utilities", ["electricity", "water", "gas", "utility", "power"]),
        ("Salaries", ["salary", "payroll", "wage", "employee", "staff"]),
        ("Taxes", ["tax", "irs", "state tax", "local tax"]),
        ("Bank Fees", ["bank fee", "transaction fee", "atm fee", "overdraft"]),
        ("Other Expenses", ["miscellaneous", "other", "general"]),
    ]
)

KEYWORD_TABLES: dict[TransactionType, KeywordTable] = {
    TransactionType.INCOME: INCOME_KEYWORDS,
    TransactionType.EXPENSE: EXPENSE_KEYWORDS,
}

DEFAULT_CATEGORIES: dict[TransactionType, str] = {
    TransactionType.INCOME: "Other Income",
    TransactionType.EXPENSE: "Other Expenses",
    TransactionType.TRANSFER: "Transfer",
}


def _categories_of(table: KeywordTable) -> list[str]:
    return list(dict.fromkeys(category for _, category in table))


class Categorizer:
    """Keyword categorizer with user-taught overrides.

    Overrides registered with :meth:`learn` map a description fragment to a
    category and are checked before the static tables.

    Parameters
    ----------
    tables : dict[TransactionType, KeywordTable] | None
        Keyword tables per transaction type. Defaults to the built-in tables.
    """

    def __init__(self, tables: dict[TransactionType, KeywordTable] | None = None) -> None:
        self.tables = tables if tables is not None else KEYWORD_TABLES
        self._learned: dict[str, str] = {}

    def learn(self, description: str, category: str) -> None:
        """Remember that descriptions containing ``description`` belong to ``category``."""
        key = description.strip().lower()
        if not key or not category:
            return
        self._learned[key] = category
        logger.debug("Learned categorization %r -> %r", key, category)

    def suggest(
        self,
        description: str,
        transaction_type: TransactionType,
        limit: int = 3,
    ) -> list[str]:
        """Suggest up to ``limit`` categories for a description.

        Parameters
        ----------
        description : str
            Free-text transaction description.
        transaction_type : TransactionType
            Selects the keyword table. Transfers have no table.
        limit : int
            Maximum number of suggestions.

        Returns
        -------
        list[str]
            Distinct categories in match order, learned overrides first.
            Empty when nothing matches.
        """
        text = description.lower()
        suggestions: list[str] = []

        for fragment, category in self._learned.items():
            if fragment in text and category not in suggestions:
                suggestions.append(category)

        for keyword, category in self.tables.get(transaction_type, []):
            if keyword in text and category not in suggestions:
                suggestions.append(category)

        return suggestions[:limit]

    def categorize(self, description: str, transaction_type: TransactionType) -> str:
        """Return the best category, or the type's default when nothing matches."""
        suggestions = self.suggest(description, transaction_type, limit=1)
        if suggestions:
            return suggestions[0]
        return DEFAULT_CATEGORIES[transaction_type]

    def categories_for(self, transaction_type: TransactionType) -> list[str]:
        """List the categories available for a transaction type."""
        if transaction_type == TransactionType.TRANSFER:
            return [DEFAULT_CATEGORIES[TransactionType.TRANSFER]]
        return _categories_of(self.tables.get(transaction_type, []))


default_categorizer = Categorizer()


def suggest_categories(
    description: str,
    transaction_type: TransactionType,
    limit: int = 3,
) -> list[str]:
    """Suggest categories using the default categorizer."""
    return default_categorizer.suggest(description, transaction_type, limit)


def categorize_transaction(description: str, transaction_type: TransactionType) -> str:
    """Categorize a description using the default categorizer."""
    return default_categorizer.categorize(description, transaction_type)


def get_categories_by_type(transaction_type: TransactionType) -> list[str]:
    """List the categories for one transaction type."""
    return default_categorizer.categories_for(transaction_type)


def get_available_categories() -> list[str]:
    """List every income and expense category."""
    return _categories_of(INCOME_KEYWORDS) + _categories_of(EXPENSE_KEYWORDS)


# Line-item rules used when converting synced records. Each rule maps any of
# its keywords to a category; the first matching rule wins per line.
LineItemRules = list[tuple[tuple[str, ...], str]]

SHOPIFY_LINE_RULES: LineItemRules = [
    (("clothing", "shirt", "dress"), "Product Sales"),
    (("digital", "download", "ebook"), "Digital Products"),
    (("service", "consulting"), "Client Services"),
    (("subscription", "membership"), "Subscription"),
]

QUICKBOOKS_INVOICE_RULES: LineItemRules = [
    (("consulting", "service"), "Client Services"),
    (("product", "goods"), "Product Sales"),
    (("subscription", "recurring"), "Subscription"),
    (("digital", "download"), "Digital Products"),
]

QUICKBOOKS_BILL_RULES: LineItemRules = [
    (("office", "supplies"), "Office Supplies"),
    (("rent", "lease"), "Rent & Utilities"),
    (("salary", "payroll", "wages"), "Payroll"),
    (("marketing", "advertising"), "Marketing & Advertising"),
    (("software", "subscription"), "Software & Subscriptions"),
    (("travel", "meals"), "Travel & Meals"),
    (("insurance",), "Insurance"),
    (("legal", "accounting"), "Professional Services"),
]


def categorize_line_items(texts: Iterable[str], rules: LineItemRules, default: str) -> str:
    """Pick the most common category across an order's line items.

    Lines that match no rule count towards ``default``. Ties go to the
    category seen first. An order without lines gets ``default``.
    """
    categories = []
    for text in texts:
        lowered = text.lower()
        category = next(
            (cat for keywords, cat in rules if any(k in lowered for k in keywords)),
            default,
        )
        categories.append(category)

    if not categories:
        return default
    # Counter preserves first-seen order, and most_common is stable on ties
    return Counter(categories).most_common(1)[0][0]
