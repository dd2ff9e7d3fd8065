# safespace/core/config.py
import logging
import os
import secrets

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class Settings:
    # Session tokens are issued by the platform's auth service; we only verify them
    JWT_SECRET = os.getenv("JWT_SECRET")

    if not JWT_SECRET:
        if os.getenv("ENV") == "development":
            JWT_SECRET = secrets.token_urlsafe(32)
            logger.warning("JWT_SECRET not set, using a temporary development secret")
        else:
            raise RuntimeError("JWT_SECRET environment variable is not set")

    JWT_ALG = os.getenv("JWT_ALG", "HS256")
    JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "10080"))
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./safespace.db")

    # AI gateway used by the chat relay
    AI_GATEWAY_API_KEY = os.getenv("AI_GATEWAY_API_KEY")
    AI_GATEWAY_URL = os.getenv(
        "AI_GATEWAY_URL",
        "https://ai.gateway.lovable.dev/v1/chat/completions",
    )
    AI_MODEL = os.getenv("AI_MODEL", "google/gemini-2.5-flash")
    RELAY_CONNECT_TIMEOUT = float(os.getenv("RELAY_CONNECT_TIMEOUT", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    VERSION = "1.0.0"

    if not AI_GATEWAY_API_KEY:
        logger.warning("AI_GATEWAY_API_KEY is not set, the chat relay will answer 500")


settings = Settings()
