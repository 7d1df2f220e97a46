"""Agent protocol - interface that bot players implement."""

from typing import Any, Dict, Protocol

from unoroom.engine import PlayerView


class AgentProtocol(Protocol):
    """Interface for UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name used when joining a room."""
        ...

    def get_action(self, player_view: PlayerView) -> Dict[str, Any]:
        """Choose the client message to send on this player's turn.

        Args:
            player_view: Filtered view with only this player's hand and public info.

        Returns:
            A client message dict, e.g. ``{"type": "drawCard"}``.
        """
        ...

    def wants_to_call_uno(self, player_view: PlayerView) -> bool:
        """Whether to send ``callUno`` now that the hand is down to one card."""
        ...
