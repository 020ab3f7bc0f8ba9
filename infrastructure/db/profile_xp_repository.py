"""
Supabase Profile XP Repository Implementation.

This module implements the ProfileXPRepository protocol using Supabase.
XP is read from profiles.xp and incremented through the
increment_profile_xp database function, which performs
`update profiles set xp = xp + p_amount ... returning xp` in one statement.
"""
from typing import Any
import logging

from supabase import Client

from application.ports.errors import RepositoryError
from domain.models.training import coerce_non_negative_float

logger = logging.getLogger(__name__)

INCREMENT_RPC = "increment_profile_xp"


def _extract_xp(data: Any) -> float:
    """RPC results come back as a scalar, a row dict, or a list of either."""
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        data = data.get("xp")
    return coerce_non_negative_float(data)


class SupabaseProfileXPRepository:
    """
    Supabase implementation of ProfileXPRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_xp(self, user_id: str) -> float:
        """Get the user's total XP (0.0 when unknown or unreadable)."""
        try:
            result = self._client.table("profiles") \
                .select("xp") \
                .eq("id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.exception(f"Error fetching XP for {user_id}: {e}")
            return 0.0

        if not result.data:
            return 0.0
        return _extract_xp(result.data)

    def increment_xp(self, user_id: str, amount: float) -> float:
        """Atomically add XP and return the new total."""
        try:
            result = self._client.rpc(
                INCREMENT_RPC,
                {
                    "p_user_id": user_id,
                    "p_amount": amount,
                },
            ).execute()
        except Exception as e:
            logger.exception(f"Error incrementing XP for {user_id}: {e}")
            raise RepositoryError(str(e), operation="increment_xp") from e

        if result.data is None:
            raise RepositoryError(f"Profile not found: {user_id}", operation="increment_xp")

        return _extract_xp(result.data)
