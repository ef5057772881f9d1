from storefront.database.base import Base
from storefront.database.engine import build_engine, engine
from storefront.database.session import SessionLocal, get_db, session_scope

__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "session_scope"]
