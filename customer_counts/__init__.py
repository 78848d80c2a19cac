"""Reconciliation core for the visitor/shopper customer count screen."""

__version__ = "0.1.0"
