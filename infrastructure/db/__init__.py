"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseWorkoutHistoryRepository,
        SupabaseProfileXPRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    history_repo = SupabaseWorkoutHistoryRepository(client)
    xp_repo = SupabaseProfileXPRepository(client)
"""

from infrastructure.db.workout_history_repository import SupabaseWorkoutHistoryRepository
from infrastructure.db.profile_xp_repository import SupabaseProfileXPRepository

__all__ = [
    # Append-only workout log
    "SupabaseWorkoutHistoryRepository",

    # Profile XP counter
    "SupabaseProfileXPRepository",
]
