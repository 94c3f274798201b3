"""
Invoice Dashboard API Package

This package provides the data-access and server-action layer of the invoice
admin dashboard, backed by PostgreSQL or, when no database is configured,
by static placeholder data.
"""

__version__ = "1.0.0"
__author__ = "Invoice Dashboard Team"
