import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

TRUTHY = ("true", "1", "yes", "on", "t")

if __name__ == "__main__":
    load_dotenv(dotenv_path=Path(__file__).parent.resolve() / ".env", override=True)

    reload_default = os.getenv("DEBUG_MODE", "False")
    uvicorn.run(
        "nms_trade.main:app",
        host=os.getenv("DEV_SERVER_HOST", "127.0.0.1"),
        port=int(os.getenv("DEV_SERVER_PORT", os.getenv("PORT", "3001"))),
        reload=os.getenv("DEV_SERVER_RELOAD", reload_default).lower() in TRUTHY,
    )
