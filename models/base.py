# models/base.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.
     Every reference table declares its own __tablename__.
     """
