"""
API module.
"""

from .routes import simulations_router, teams_router, scoring_router

__all__ = [
    "simulations_router",
    "teams_router",
    "scoring_router",
]
