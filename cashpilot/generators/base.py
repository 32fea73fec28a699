"""Base generator class for all data generators."""

from __future__ import annotations

import random
from abc import ABC
from datetime import datetime, timedelta
from decimal import Decimal

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation and seed-based
    reproducibility.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    @staticmethod
    def money(low: float, high: float) -> Decimal:
        """Random amount between ``low`` and ``high``, rounded to cents."""
        return Decimal(str(round(random.uniform(low, high), 2)))

    @staticmethod
    def moment_in_month(month_start: datetime) -> datetime:
        """Random business-hours timestamp within the first 28 days of a month."""
        return month_start + timedelta(
            days=random.randint(0, 27),
            hours=random.randint(8, 18),
            minutes=random.randint(0, 59),
        )
