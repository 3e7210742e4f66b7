"""
Database Configuration Module

This module handles the database configuration and connection setup for the bookkeeping API.
It uses SQLAlchemy for ORM (Object-Relational Mapping). The engine URL comes from
``DATABASE_URL``; without it the store is an in-memory SQLite database that lives as long
as the process does.

The module includes:
- Engine construction (shared connection for in-memory SQLite)
- Session management
- Base model class definition
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from pembukuan import config


def build_engine(url: str = None):
    """
    Create an engine for ``url`` (defaults to ``config.DATABASE_URL``).

    SQLite connections are opened with ``check_same_thread=False`` because FastAPI runs
    plain ``def`` endpoints in a threadpool. In-memory SQLite additionally needs a
    ``StaticPool`` so that every session sees the same database.
    """
    url = url or config.DATABASE_URL
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


# Create SQLAlchemy engine
# The engine is the entry point to the SQLAlchemy ORM
engine = build_engine()

# Create SessionLocal class
# SessionLocal is a factory for creating new Session objects
# autocommit=False means we need to explicitly commit transactions
# autoflush=False means we need to explicitly flush changes to the database
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class
# Base is the declarative base class that our ORM models will inherit from
Base = declarative_base()


# Dependency to get database session
def get_db():
    """
    Dependency function that provides a database session.

    This function creates a new database session for each request and ensures
    that the session is properly closed after the request is completed.

    Yields:
        Session: A SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
