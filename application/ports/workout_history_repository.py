"""
Workout History Repository Interface (Port).

Workout history is an append-only log of finished sessions. Sessions are
written once, when a workout is finished, and never updated.
"""
from typing import List, Optional, Protocol

from domain.models.training import WorkoutSession


class WorkoutHistoryRepository(Protocol):
    """
    Abstract interface for reading and appending workout sessions.
    """

    def list_sessions(
        self,
        user_id: str,
        *,
        limit: Optional[int] = None,
        strict: bool = False,
    ) -> List[WorkoutSession]:
        """
        Get a user's sessions, newest first.

        Args:
            user_id: User ID
            limit: Keep only the most recent N sessions (None for all)
            strict: Raise on read failure instead of returning []

        Returns:
            List of WorkoutSession, [] when the user has no history

        Raises:
            RepositoryError: If strict and the history could not be read
        """
        ...

    def append_session(
        self,
        user_id: str,
        session: WorkoutSession,
    ) -> WorkoutSession:
        """
        Persist a finished session.

        Args:
            user_id: User ID
            session: The finished session

        Returns:
            The stored session (with its storage id)

        Raises:
            RepositoryError: If the session could not be stored
        """
        ...
