"""Service layer for the pos app."""

from . import datastore, deduction_service, kpis, sale_service

__all__ = [
    "datastore",
    "deduction_service",
    "kpis",
    "sale_service",
]
