"""
FastAPI Dependency Providers for the Training Progression API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository, service and use case providers create new instances per-request
- Auth providers wrap backend.auth

Usage in routers:
    from api.deps import get_current_user, get_progression_service
    from backend.core.progression_service import ProgressionService

    @router.get("/progression/records")
    def records(
        user_id: str = Depends(get_current_user),
        service: ProgressionService = Depends(get_progression_service),
    ):
        return service.get_personal_records(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_history_repo] = lambda: FakeWorkoutHistoryRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import WorkoutHistoryRepository, ProfileXPRepository
from application.use_cases import CompleteWorkoutUseCase, PlanWorkoutUseCase
from backend.core.progression_service import ProgressionService

# Concrete implementations
from infrastructure import (
    SupabaseWorkoutHistoryRepository,
    SupabaseProfileXPRepository,
)

from backend.settings import Settings, get_settings as _get_settings

# Auth (wrap to maintain single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_history_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutHistoryRepository:
    """
    Get WorkoutHistoryRepository implementation.

    Returns a SupabaseWorkoutHistoryRepository instance with injected client.
    The return type is the Protocol to enable easy faking.

    Args:
        client: Supabase client (injected)

    Returns:
        WorkoutHistoryRepository: Repository for the workout session log
    """
    return SupabaseWorkoutHistoryRepository(client)


def get_xp_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProfileXPRepository:
    """
    Get ProfileXPRepository implementation.

    Args:
        client: Supabase client (injected)

    Returns:
        ProfileXPRepository: Repository for the profile XP counter
    """
    return SupabaseProfileXPRepository(client)


# =============================================================================
# Service / Use Case Providers
# =============================================================================


def get_progression_service(
    history_repo: WorkoutHistoryRepository = Depends(get_history_repo),
    xp_repo: ProfileXPRepository = Depends(get_xp_repo),
    settings: Settings = Depends(get_settings),
) -> ProgressionService:
    """Get ProgressionService wired with repositories and tuning from settings."""
    return ProgressionService(
        history_repo,
        xp_repo,
        leveling=settings.leveling_config(),
        overload_rule=settings.overload_rule(),
        history_window=settings.history_window,
    )


def get_plan_workout_use_case(
    history_repo: WorkoutHistoryRepository = Depends(get_history_repo),
    settings: Settings = Depends(get_settings),
) -> PlanWorkoutUseCase:
    """Get PlanWorkoutUseCase."""
    return PlanWorkoutUseCase(
        history_repo,
        overload_rule=settings.overload_rule(),
        history_window=settings.history_window,
    )


def get_complete_workout_use_case(
    history_repo: WorkoutHistoryRepository = Depends(get_history_repo),
    xp_repo: ProfileXPRepository = Depends(get_xp_repo),
    settings: Settings = Depends(get_settings),
) -> CompleteWorkoutUseCase:
    """Get CompleteWorkoutUseCase."""
    return CompleteWorkoutUseCase(
        history_repo,
        xp_repo,
        xp_formula=settings.xp_formula(),
        leveling=settings.leveling_config(),
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> str:
    """
    Get the current authenticated user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Args:
        authorization: Bearer token header
        x_api_key: API key header

    Returns:
        str: User ID from authentication

    Raises:
        HTTPException: 401 if authentication fails
    """
    return await _get_current_user(
        authorization=authorization,
        x_api_key=x_api_key,
    )


# =============================================================================
# Exports
# =============================================================================

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
