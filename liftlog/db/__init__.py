"""Database package: engine, session, base."""

from liftlog.db.session import async_session_maker, get_db, get_session_factory

__all__ = ["async_session_maker", "get_db", "get_session_factory"]
