# nms_trade/__init__.py
"""NMS Trade: multi-tenant backend for items, stations and station demand levels."""

__version__ = "0.1.0"
