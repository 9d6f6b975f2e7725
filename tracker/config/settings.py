# tracker/config/settings.py
# Application settings, resolved once from the environment at startup

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SQLITE_URL = "sqlite:///./tracker.db"


def resolve_database_url(database_url: Optional[str], mysql_url: Optional[str] = None) -> str:
    """Pick the storage backend from the configured connection strings.

    MYSQL_URL wins when present, then DATABASE_URL; anything that is not a
    MySQL or Postgres URL falls back to SQLite.
    """
    url = (mysql_url or database_url or "").strip()
    if not url:
        return DEFAULT_SQLITE_URL

    if url.startswith("mysql://"):
        return "mysql+pymysql://" + url[len("mysql://"):]
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    if url.startswith(("postgresql", "mysql+", "sqlite")):
        return url
    return DEFAULT_SQLITE_URL


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass
class Settings:
    """Security, storage and runtime configuration for the application"""

    database_url: str = DEFAULT_SQLITE_URL
    database_sslmode: Optional[str] = None

    jwt_secret: str = "secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_days: int = 7
    bcrypt_salt_rounds: int = 10

    environment: str = "production"
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    default_admin_name: str = "System Administrator"
    default_admin_email: str = "admin@4am.com"
    default_admin_password: str = "admin123"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def backend(self) -> str:
        """Short backend name: sqlite, postgresql or mysql"""
        return self.database_url.split(":", 1)[0].split("+", 1)[0]

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            database_url=resolve_database_url(os.getenv("DATABASE_URL"), os.getenv("MYSQL_URL")),
            database_sslmode=os.getenv("DATABASE_SSLMODE") or None,
            jwt_secret=os.getenv("JWT_SECRET", "secret"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_days=_env_int("ACCESS_TOKEN_EXPIRE_DAYS", 7),
            bcrypt_salt_rounds=_env_int("BCRYPT_SALT_ROUNDS", 10),
            environment=os.getenv("ENVIRONMENT", os.getenv("NODE_ENV", "production")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            default_admin_name=os.getenv("DEFAULT_ADMIN_NAME", "System Administrator"),
            default_admin_email=os.getenv("DEFAULT_ADMIN_EMAIL", "admin@4am.com").lower(),
            default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD", "admin123"),
        )


settings = Settings.from_env()
