# nms_trade/cli/config.py
import os
from dotenv import load_dotenv
from pathlib import Path

# This cli/config.py file is at <project>/nms_trade/cli/config.py
project_root = Path(__file__).parent.parent.parent.resolve()

load_dotenv(dotenv_path=project_root / '.env', override=False)

NMS_TRADE_API_BASE_URL = os.getenv("NMS_TRADE_API_BASE_URL", "http://127.0.0.1:3001/api")

# Tenant token sent as the bearer credential
NMS_TRADE_USER_TOKEN = os.getenv("NMS_TRADE_USER_TOKEN")
