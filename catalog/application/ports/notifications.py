"""Outbound notification interfaces.

Implementations deliver messages outside the request; application logic only
depends on these protocols.
"""
from typing import Protocol


class PasswordResetNotifier(Protocol):
    def send_reset_link(self, email: str, reset_url: str) -> None:
        """Hand a reset link off for delivery. May raise if the hand-off fails."""
