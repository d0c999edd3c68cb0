"""Database package: engine, session, base."""

from fitsnap.db.session import get_service_db, service_session_maker

__all__ = ["get_service_db", "service_session_maker"]
