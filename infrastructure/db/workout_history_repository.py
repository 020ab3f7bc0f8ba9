"""
Supabase Workout History Repository Implementation.

This module implements the WorkoutHistoryRepository protocol using Supabase.
Sessions live in the workout_logs table; the exercises and their sets are
stored in the detailed_logs JSONB column.
"""
from typing import Optional, List, Dict, Any
import logging

from pydantic import ValidationError
from supabase import Client

from application.ports.errors import RepositoryError
from domain.models.training import WorkoutSession

logger = logging.getLogger(__name__)

TABLE = "workout_logs"
COLUMNS = "id, user_id, date, routine_name, duration_minutes, total_volume, detailed_logs"


def row_to_session(row: Dict[str, Any]) -> Optional[WorkoutSession]:
    """
    Convert a workout_logs row to a WorkoutSession.

    Stored logs were typed in by users, so numeric junk is coerced by the
    model. Rows that still cannot be parsed (missing date, wrong shapes)
    are skipped.

    Returns:
        WorkoutSession, or None if the row is unusable
    """
    try:
        return WorkoutSession(
            id=str(row["id"]) if row.get("id") is not None else None,
            date=row.get("date"),
            routine_name=row.get("routine_name"),
            duration_minutes=row.get("duration_minutes"),
            total_volume=row.get("total_volume"),
            exercises=row.get("detailed_logs") or [],
        )
    except ValidationError as e:
        logger.warning(f"Skipping malformed workout log {row.get('id')}: {e.error_count()} errors")
        return None


def session_to_row(user_id: str, session: WorkoutSession) -> Dict[str, Any]:
    """Convert a WorkoutSession to a workout_logs row for insert."""
    exercises = [ex.model_dump(mode="json") for ex in session.exercises]
    return {
        "user_id": user_id,
        "date": session.date.isoformat(),
        "routine_name": session.routine_name,
        "duration_minutes": session.duration_minutes,
        "total_volume": session.total_volume,
        "exercises_completed": sum(1 for ex in session.exercises if ex.sets),
        "detailed_logs": exercises,
    }


class SupabaseWorkoutHistoryRepository:
    """
    Supabase implementation of WorkoutHistoryRepository.

    The table is append-only: rows are inserted when a workout is finished
    and never updated.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def list_sessions(
        self,
        user_id: str,
        *,
        limit: Optional[int] = None,
        strict: bool = False,
    ) -> List[WorkoutSession]:
        """
        Get a user's sessions, newest first.

        Read errors return [] unless `strict` is set, in which case they
        raise RepositoryError.
        """
        try:
            query = self._client.table(TABLE) \
                .select(COLUMNS) \
                .eq("user_id", user_id) \
                .order("date", desc=True)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            logger.exception(f"Error fetching workout history for {user_id}: {e}")
            if strict:
                raise RepositoryError(str(e), operation="list_sessions") from e
            return []

        sessions = []
        for row in result.data or []:
            session = row_to_session(row)
            if session is not None:
                sessions.append(session)
        return sessions

    def append_session(
        self,
        user_id: str,
        session: WorkoutSession,
    ) -> WorkoutSession:
        """Persist a finished session."""
        try:
            result = self._client.table(TABLE).insert(session_to_row(user_id, session)).execute()
        except Exception as e:
            logger.exception(f"Error saving workout session for {user_id}: {e}")
            raise RepositoryError(str(e), operation="append_session") from e

        if not result.data:
            raise RepositoryError("Insert returned no rows", operation="append_session")

        stored_id = result.data[0].get("id")
        logger.info(f"Saved workout session {stored_id} for {user_id}")
        return session.model_copy(update={"id": str(stored_id) if stored_id is not None else None})
