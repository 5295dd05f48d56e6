# nms_trade/cli/__init__.py
"""Command line interface for the NMS Trade API (`nms-trade`)."""
