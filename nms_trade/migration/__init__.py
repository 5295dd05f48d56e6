# nms_trade/migration/__init__.py
"""Bulk import of whole tenant datasets."""

from .models import MigrationRequest, MigrationResult
from .service import MigrationService

__all__ = ["MigrationRequest", "MigrationResult", "MigrationService"]
