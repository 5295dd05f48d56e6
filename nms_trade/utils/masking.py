# nms_trade/utils/masking.py


def mask_token(token: str, visible: int = 6) -> str:
    """Shorten a tenant token for log output so full tokens never reach the logs."""
    return f"{token[:min(visible, len(token) // 2)]}..."
