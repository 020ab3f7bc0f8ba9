"""
Profile XP Repository Interface (Port).

Total XP is a monotonically increasing counter on the user profile. Two
devices can finish sessions at the same time, so XP is only ever changed
through an atomic server-side increment. Writing an absolute value computed
by the client would lose one of the updates.
"""
from typing import Protocol


class ProfileXPRepository(Protocol):
    """
    Abstract interface for the profile XP counter.
    """

    def get_xp(self, user_id: str) -> float:
        """
        Get the user's total XP.

        Args:
            user_id: User ID

        Returns:
            Total XP, 0.0 for unknown users
        """
        ...

    def increment_xp(self, user_id: str, amount: float) -> float:
        """
        Atomically add XP to the user's total.

        Args:
            user_id: User ID
            amount: XP to add (non-negative)

        Returns:
            Total XP after the increment

        Raises:
            RepositoryError: If the increment could not be applied
        """
        ...
