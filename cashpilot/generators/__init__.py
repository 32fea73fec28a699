"""Synthetic data generators."""

from cashpilot.generators.base import BaseGenerator
from cashpilot.generators.quickbooks import QuickBooksGenerator
from cashpilot.generators.shopify import ShopifyOrderGenerator
from cashpilot.generators.transaction import TransactionGenerator

__all__ = [
    "BaseGenerator",
    "QuickBooksGenerator",
    "ShopifyOrderGenerator",
    "TransactionGenerator",
]
