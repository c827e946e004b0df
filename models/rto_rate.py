# models/rto_rate.py
from sqlalchemy import Column, Integer, String, Numeric, Boolean
from .base import Base


class RtoRate(Base):
     """
     RtoRate model - financing-rate eligibility rule for a project and unit type.
     Area bounds are optional; a missing bound leaves that side open.
     Maps to the 'rto_rates' table.
     """
     __tablename__ = "rto_rates"

     id = Column(Integer, primary_key=True, autoincrement=True)
     project_code = Column(String(10), nullable=False, index=True)
     unit_type = Column(String(20), nullable=False)
     area_min = Column(Numeric(10, 2), nullable=True)
     area_max = Column(Numeric(10, 2), nullable=True)
     monthly_rate = Column(Numeric(12, 2), nullable=False)
     memo_ref = Column(String(255), nullable=True)
     is_active = Column(Boolean, default=True, nullable=False)

     def __repr__(self):
          return (
               f"<RtoRate(id={self.id}, project_code='{self.project_code}', "
               f"unit_type='{self.unit_type}', area={self.area_min}-{self.area_max})>"
          )
