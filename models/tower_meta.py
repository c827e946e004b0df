# models/tower_meta.py
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from .base import Base


class TowerMeta(Base):
     """
     TowerMeta model - tower names per property.
     Maps to the 'tower_meta' reference table.
     """
     __tablename__ = "tower_meta"
     __table_args__ = (
          UniqueConstraint("property_code", "tower_code", name="uq_tower_meta_property_tower"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     property_code = Column(String(10), ForeignKey("property_meta.code"), nullable=False)
     tower_code = Column(String(50), nullable=False, index=True)
     tower_name = Column(String(255), nullable=True)

     # Relationships
     property = relationship("PropertyMeta", back_populates="towers")

     def __repr__(self):
          return f"<TowerMeta(property_code='{self.property_code}', tower_code='{self.tower_code}')>"
