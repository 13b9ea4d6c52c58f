import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


def _setting(key, default=None):
    """env.yaml value, else the environment variable of the same name"""
    value = data.get(key)
    if value is None:
        value = os.environ.get(key, default)
    return value


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./remarks.db")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    ENABLE_SENTRY = data.get("ENABLE_SENTRY", 0)
    DSN_SENTRY = data.get("DSN_SENTRY", "")
    SENTRY_ENVIRONMENT = data.get("SENTRY_ENVIRONMENT", "dev")

    # Priority ERP
    ERP_API_URL = _setting("ERP_API_URL")
    ERP_API_KEY = _setting("ERP_API_KEY")
    ERP_API_SECRET = _setting("ERP_API_SECRET")
    ERP_TIMEOUT_SECONDS = float(_setting("ERP_TIMEOUT_SECONDS", 5.0))
    ERP_REFRESH_INTERVAL_MS = int(_setting("ERP_REFRESH_INTERVAL_MS", 60000))
