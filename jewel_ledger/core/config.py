from __future__ import annotations

import os
from dataclasses import dataclass

from jewel_ledger.domain.pagination import rows_per_page

# A4 landscape, in points.
A4_LANDSCAPE_HEIGHT = 595.28


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass(frozen=True)
class PageGeometry:
    """Table band of a printed statement page; everything in points."""
    header_section: float
    page_height: float = A4_LANDSCAPE_HEIGHT
    margin: float = 30
    footer: float = 30
    table_header: float = 40
    row_height: float = 18

    @property
    def table_start(self) -> float:
        return self.page_height - self.margin - self.header_section

    @property
    def table_end(self) -> float:
        return self.margin + self.footer

    @property
    def max_rows_per_page(self) -> int:
        return rows_per_page(
            self.table_start - self.table_end, self.row_height, self.table_header
        )


STATEMENT_GEOMETRY = PageGeometry(header_section=180)
LOCKER_GEOMETRY = PageGeometry(header_section=120)


@dataclass(frozen=True)
class Settings:
    app_env: str
    database_url: str
    log_level: str
    log_json: bool
    cors_origins: list[str]
    statement_rows_per_page: int
    locker_rows_per_page: int


def get_engine_url(database_type: str | None = None) -> str:
    """Database URL from the environment; DATABASE_URL wins when set."""
    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit

    db_type = database_type or os.getenv("DATABASE_TYPE", "sqlite")

    if db_type == "sqlite":
        db_path = os.getenv("DATABASE_PATH", "./data/jewel_ledger.db")
        return f"sqlite:///{db_path}"
    elif db_type == "postgresql":
        host = os.getenv("DB_HOST", "localhost")
        port = os.getenv("DB_PORT", "5432")
        dbname = os.getenv("DB_NAME", "jewel_ledger")
        user = os.getenv("DB_USER", "postgres")
        password = os.getenv("DB_PASSWORD", "postgres")
        return f"postgresql://{user}:{password}@{host}:{port}/{dbname}"
    else:
        raise ValueError(f"Unsupported database type: {db_type}")


def load_settings() -> Settings:
    app_env = os.getenv("APP_ENV", "development")
    statement_rows = _parse_int(os.getenv("STATEMENT_ROWS_PER_PAGE"))
    locker_rows = _parse_int(os.getenv("LOCKER_ROWS_PER_PAGE"))
    return Settings(
        app_env=app_env,
        database_url=get_engine_url(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_json=_parse_bool(os.getenv("LOG_JSON"), app_env == "production"),
        cors_origins=_parse_csv(os.getenv("CORS_ORIGINS", "*")),
        statement_rows_per_page=(
            STATEMENT_GEOMETRY.max_rows_per_page if statement_rows is None else statement_rows
        ),
        locker_rows_per_page=(
            LOCKER_GEOMETRY.max_rows_per_page if locker_rows is None else locker_rows
        ),
    )


settings = load_settings()
