import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from typing import Optional

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


class Settings(BaseSettings):
    app_env: str = os.getenv("APP_ENV", "development")
    host: str = os.getenv("APP_HOST", "0.0.0.0")
    port: int = int(os.getenv("APP_PORT", "8001"))
    # "mcp" serves the MCP endpoint, "shim" the plain FastAPI routes
    server_mode: str = os.getenv("SERVER_MODE", "mcp")

    # logging
    log_dir: str = os.getenv("LOG_DIR", "logs")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # provider endpoints
    telegram_api_url: str = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")
    wapilot_api_url: str = os.getenv("WAPILOT_API_URL", "https://wapilot.net/api/v1")
    waconnect_api_url: str = os.getenv(
        "WACONNECT_API_URL", "https://waconnect.aimicromind.com/api/v1"
    )
    octobot_api_url: str = os.getenv(
        "OCTOBOT_API_URL", "https://api.zentramsg.com/v1/messages"
    )
    octobot_group_url: str = os.getenv(
        "OCTOBOT_GROUP_URL", "https://api.zentramsg.com/v1/whatsapp/groups/create"
    )

    # timeouts (seconds); None keeps the aiohttp default
    request_timeout: Optional[float] = _optional_float("REQUEST_TIMEOUT")
    media_timeout: float = float(os.getenv("MEDIA_TIMEOUT", "30"))

    # agent-visible error text is cut to this many characters
    max_error_length: int = int(os.getenv("MAX_ERROR_LENGTH", "100"))

    # host side: JSON list of {"node": ..., "inputs": {...}}
    tools_config_path: str = os.getenv(
        "TOOLS_CONFIG_PATH", os.path.join(os.getcwd(), "tools.json")
    )


settings = Settings()
