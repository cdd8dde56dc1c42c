"""Time clock core: ledger, session reconstruction, calendar and summary."""

__version__ = "0.1.0"
