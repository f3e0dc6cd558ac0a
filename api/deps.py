from __future__ import annotations

from collections.abc import Generator

from sqlalchemy.orm import Session

from core.config import Settings, get_settings
from core.db import get_session_factory
from core.services.chat import ChatClient


def get_db() -> Generator[Session, None, None]:
    session = get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_app_settings() -> Settings:
    return get_settings()


def get_chat_client() -> ChatClient:
    return ChatClient(get_settings())
