"""CashPilot analytics core: transaction summaries, insights and health scoring."""

__version__ = "0.1.0"
