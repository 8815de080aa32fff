"""Pydantic schemas for database records."""

from .tenant import TenantSnapshot

__all__ = ["TenantSnapshot"]
