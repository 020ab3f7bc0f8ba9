"""
Infrastructure Layer for the Training Progression API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseWorkoutHistoryRepository,
    SupabaseProfileXPRepository,
)

__all__ = [
    "SupabaseWorkoutHistoryRepository",
    "SupabaseProfileXPRepository",
]
