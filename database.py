# database.py
"""
SQLAlchemy database connection and session management.

This module provides:
- Database engine configuration for Azure SQL (MS SQL Server), or any
  URL given through DATABASE_URL
- Session factory for dependency injection
- A context manager for reads outside request handlers

Usage:
     from database import get_session

     # In FastAPI routes:
     @router.get("/rates")
     def list_rates(db: Session = Depends(get_session)):
          return db.query(RtoRate).all()
"""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool

from config import get_settings

DATABASE_URL = get_settings().database.connection_string


def _engine_options(url: str) -> dict:
     """Pool settings for server databases; SQLite keeps its own defaults."""
     if url.startswith("sqlite"):
          return {"connect_args": {"check_same_thread": False}}
     return {
          "poolclass": QueuePool,
          "pool_size": 5,
          "max_overflow": 10,
          "pool_timeout": 30,
          "pool_recycle": 1800,  # Recycle connections after 30 minutes
     }


# Create SQLAlchemy engine
engine = create_engine(
     DATABASE_URL,
     echo=get_settings().database.echo,
     **_engine_options(DATABASE_URL),
)

# Session factory
SessionLocal = sessionmaker(
     bind=engine,
     autocommit=False,
     autoflush=False,
     expire_on_commit=False,
)


def get_session() -> Generator[Session, None, None]:
     """
     FastAPI dependency that provides a database session.

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()


@contextmanager
def get_session_context() -> Generator[Session, None, None]:
     """
     Context manager for database sessions (for use outside FastAPI routes).

     Usage:
          with get_session_context() as db:
               towers = db.query(TowerMeta).all()

     Yields:
          Session: SQLAlchemy database session
     """
     session = SessionLocal()
     try:
          yield session
          session.commit()
     except Exception:
          session.rollback()
          raise
     finally:
          session.close()
