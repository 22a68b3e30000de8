import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./finly.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3001)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    DEBUG = bool(data.get("DEBUG", False))
    CREATE_TABLES_ON_STARTUP = bool(data.get("CREATE_TABLES_ON_STARTUP", True))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_TTL_HOURS = int(data.get("SESSION_TTL_HOURS", 24))
    SESSION_SWEEP_ENABLED = bool(data.get("SESSION_SWEEP_ENABLED", True))
    SESSION_SWEEP_INTERVAL_MINUTES = int(data.get("SESSION_SWEEP_INTERVAL_MINUTES", 60))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "")
