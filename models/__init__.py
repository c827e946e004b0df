# models/__init__.py
from .base import Base
from .property_meta import PropertyMeta
from .tower_meta import TowerMeta
from .rto_rate import RtoRate

__all__ = [
     "Base",
     "PropertyMeta",
     "TowerMeta",
     "RtoRate",
]
