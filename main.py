# main.py - run the Safe Space API locally (python main.py)
import os

from safespace.core.config import settings
from safespace.main import app

if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port, log_level=settings.LOG_LEVEL.lower())
