"""
Router package for the Training Progression API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- progression: Records, strength history, suggestions, level and stats
- workouts: Finishing a workout (session log + XP award)
"""

from api.routers.health import router as health_router
from api.routers.progression import router as progression_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "health_router",
    "progression_router",
    "workouts_router",
]
