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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Access tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 15))
    # Re-check the password watermark and account status on every verification
    ENFORCE_TOKEN_VERSION = bool(data.get("ENFORCE_TOKEN_VERSION", True))

    # Sessions
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    MAX_ACTIVE_SESSIONS = int(data.get("MAX_ACTIVE_SESSIONS", 5))

    # Password reset
    PASSWORD_RESET_EXPIRE_MINUTES = int(data.get("PASSWORD_RESET_EXPIRE_MINUTES", 60))

    # Argon2id cost parameters (memory in KiB)
    ARGON2_TIME_COST = int(data.get("ARGON2_TIME_COST", 3))
    ARGON2_MEMORY_COST = int(data.get("ARGON2_MEMORY_COST", 65536))
    ARGON2_PARALLELISM = int(data.get("ARGON2_PARALLELISM", 4))
