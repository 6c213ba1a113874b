import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

# For automated tests (SQLite), we need to prevent backend/.env from overriding the
# test DATABASE_URL. Set DISABLE_DOTENV=1 to skip loading .env.
if os.getenv("DISABLE_DOTENV") != "1":
    load_dotenv(override=True)

# Default to a local SQLite DB for dev so the backend can start out-of-the-box.
_default_sqlite_path = (Path(__file__).resolve().parent.parent / "dev.db").as_posix()

_TRUTHY = {"1", "true", "True", "yes", "YES"}


def _optional_int(raw: str | None) -> int | None:
    raw = (raw or "").strip()
    if not raw:
        return None
    return int(raw)


def _split_origins(raw: str | None) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in (raw or "").split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed explicitly."""

    database_url: str = f"sqlite:///{_default_sqlite_path}"
    # NOTE: keep a default for local dev so the server can boot even if SECRET_KEY isn't set.
    secret_key: str = "dev_secret_change_me"
    jwt_algorithm: str = "HS256"
    # None means issued tokens carry no `exp` claim.
    access_token_expire_minutes: int | None = None
    frontend_origins: tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=(os.getenv("DATABASE_URL") or "").strip() or f"sqlite:///{_default_sqlite_path}",
            secret_key=os.getenv("SECRET_KEY", "dev_secret_change_me"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=_optional_int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES")),
            frontend_origins=_split_origins(os.getenv("FRONTEND_ORIGINS")),
            log_level=(os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper(),
            sql_echo=(os.getenv("SQL_ECHO", "0") or "0").strip() in _TRUTHY,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
