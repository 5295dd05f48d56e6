# nms_trade/utils/__init__.py
"""Small helpers shared across the trade API."""

from .masking import mask_token

__all__ = ["mask_token"]
