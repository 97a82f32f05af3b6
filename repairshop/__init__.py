"""Repair shop inventory ledger and service-order engine."""

__version__ = "1.0.0"
