# models/property_meta.py
from sqlalchemy import Column, String, Text, Boolean
from sqlalchemy.orm import relationship
from .base import Base


class PropertyMeta(Base):
     """
     PropertyMeta model - property directory (code, name, city, address).
     Maps to the 'property_meta' reference table.
     """
     __tablename__ = "property_meta"

     code = Column(String(10), primary_key=True)
     name = Column(String(255), nullable=False)
     city = Column(String(100), nullable=True)
     address = Column(Text, nullable=True)
     active = Column(Boolean, default=True, nullable=False)

     # Relationships
     towers = relationship("TowerMeta", back_populates="property")

     def __repr__(self):
          return f"<PropertyMeta(code='{self.code}', name='{self.name}')>"
