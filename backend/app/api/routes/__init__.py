"""
API route modules.
"""

from .simulations_routes import router as simulations_router
from .teams_routes import router as teams_router
from .scoring_routes import router as scoring_router

__all__ = ["simulations_router", "teams_router", "scoring_router"]
