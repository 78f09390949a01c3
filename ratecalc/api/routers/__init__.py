"""
ratecalc/api/routers package marker.
"""

from ratecalc.api.routers.metrics_router import router as metrics_router

__all__ = [
    "metrics_router",
]
