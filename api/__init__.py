"""
API package for the Training Progression API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_history_repo,
    get_xp_repo,
    get_progression_service,
    get_plan_workout_use_case,
    get_complete_workout_use_case,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_history_repo",
    "get_xp_repo",
    # Services / use cases
    "get_progression_service",
    "get_plan_workout_use_case",
    "get_complete_workout_use_case",
    # Authentication
    "get_current_user",
]
