from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from sqlmodel import Session, SQLModel, create_engine

from onigokko.config import settings


def _find_server_root() -> Path:
    """Walk up from this file to find the directory containing pyproject.toml."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / 'pyproject.toml').exists():
            return current
        current = current.parent
    msg = 'Could not find server root (no pyproject.toml in parent directories)'
    raise RuntimeError(msg)


def _default_db_url() -> tuple[str, Path | None]:
    if settings.database_url:
        return settings.database_url, None
    db_dir = _find_server_root() / 'data'
    return f'sqlite:///{db_dir / "onigokko.db"}', db_dir


DB_URL, DB_DIR = _default_db_url()

_connect_args = {'check_same_thread': False} if DB_URL.startswith('sqlite') else {}

engine = create_engine(DB_URL, connect_args=_connect_args)


def create_db_and_tables() -> None:
    import onigokko.models  # noqa: F401  registers all tables on metadata

    if DB_DIR is not None:
        DB_DIR.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session
