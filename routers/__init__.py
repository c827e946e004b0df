# routers/__init__.py
from .availability import router as availability_router
from .pricing import router as pricing_router
from .rates import router as rates_router

__all__ = [
     "availability_router",
     "pricing_router",
     "rates_router",
]
