"""Game state for an UNO room."""

import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from unoroom.engine.card import Card


@dataclass
class Player:
    """A seat in the room. Hand order carries no meaning."""

    id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    ready: bool = False
    last_card_timestamp: Optional[int] = None  # ms, set when hand reaches 1 card
    called_uno: bool = False

    def find_card(self, card_id: str) -> Optional[Card]:
        return next((c for c in self.hand if c.id == card_id), None)


@dataclass
class PendingDecision:
    """A playable card was just drawn; its owner must play or keep it."""

    player_id: str
    card_id: str


@dataclass
class GameState:
    """Root aggregate for one room.

    ``players`` is in join order and ``players[0]`` is the host. ``deck`` pops
    from the end; the top of ``discard_pile`` is its last element.
    """

    players: List[Player] = field(default_factory=list)
    deck: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    current_player_index: int = 0
    direction: int = 1  # 1 = join order, -1 = reversed
    started: bool = False
    last_action_timestamp: Optional[int] = None
    pending_decision: Optional[PendingDecision] = None

    def clone(self) -> "GameState":
        """Deep copy; handlers mutate the clone and never their input."""
        return copy.deepcopy(self)

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def player_index(self, player_id: str) -> int:
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i
        return -1

    @property
    def host(self) -> Optional[Player]:
        return self.players[0] if self.players else None

    @property
    def current_player(self) -> Optional[Player]:
        if not self.started or not self.players:
            return None
        return self.players[self.current_player_index]

    def card_count(self) -> int:
        """Cards on the table: deck + discard + every hand."""
        return len(self.deck) + len(self.discard_pile) + sum(len(p.hand) for p in self.players)


@dataclass
class PlayerView:
    """What one player is entitled to see.

    Contains only that player's hand; opponents are reduced to card counts.
    """

    player_id: str
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_player_id: Optional[str]
    direction: int
    started: bool
    deck_size: int
    num_cards_per_player: Dict[str, int]
    called_uno: bool
    pending_card_id: Optional[str]

    @classmethod
    def from_state(cls, state: GameState, player_id: str) -> "PlayerView":
        """Create a player view from full game state, hiding other players' hands."""
        player = state.find_player(player_id)
        current = state.current_player
        pending = state.pending_decision
        return cls(
            player_id=player_id,
            my_hand=list(player.hand) if player else [],
            top_discard=state.top_discard(),
            current_player_id=current.id if current else None,
            direction=state.direction,
            started=state.started,
            deck_size=len(state.deck),
            num_cards_per_player={p.id: len(p.hand) for p in state.players},
            called_uno=player.called_uno if player else False,
            pending_card_id=pending.card_id if pending and pending.player_id == player_id else None,
        )
