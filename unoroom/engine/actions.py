"""State transitions, one per client intent.

Every handler takes the current state and returns a new one. The input is
never mutated: handlers work on a clone and raise a GameError before
returning anything when the intent is rejected.
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from unoroom.config import Settings
from unoroom.engine.card import Card, Color
from unoroom.engine.deck import generate_deck, shuffle
from unoroom.engine.errors import (
    AuthorizationError,
    NotFoundError,
    PhasePreconditionError,
    RuleViolationError,
)
from unoroom.engine.game_state import GameState, PendingDecision, Player
from unoroom.engine.penalty import apply_uno_penalties, sync_last_card
from unoroom.engine.rules import apply_effect, is_playable
from unoroom.engine.turns import advance, draw_cards

DEFAULT_SETTINGS = Settings()


@dataclass
class ActionResult:
    """New state, plus a card to offer privately to the actor after a draw."""

    state: GameState
    drawn_card: Optional[Card] = None


def _reset_table(state: GameState, clear_ready: bool) -> None:
    state.started = False
    state.deck = []
    state.discard_pile = []
    state.current_player_index = 0
    state.direction = 1
    state.pending_decision = None
    for p in state.players:
        p.hand = []
        p.last_card_timestamp = None
        p.called_uno = False
        if clear_ready:
            p.ready = False


def _require_player(state: GameState, actor_id: str) -> Player:
    player = state.find_player(actor_id)
    if player is None:
        raise NotFoundError("Player not found")
    return player


def _require_host(state: GameState, actor_id: str, verb: str) -> None:
    host = state.host
    if host is None or host.id != actor_id:
        raise AuthorizationError(f"Only the host can {verb} the game")


def _require_turn(state: GameState, actor_id: str) -> Player:
    if not state.started:
        raise PhasePreconditionError("Game not started")
    player = _require_player(state, actor_id)
    if state.player_index(actor_id) != state.current_player_index:
        raise AuthorizationError("Not your turn")
    return player


def join(state: GameState, actor_id: str, name: str, settings: Settings = DEFAULT_SETTINGS) -> GameState:
    if state.started:
        raise PhasePreconditionError("Game already in progress")
    if len(state.players) >= settings.max_players:
        raise PhasePreconditionError(f"Room is full (maximum {settings.max_players} players)")
    if state.find_player(actor_id) is not None:
        raise RuleViolationError("You are already in this room")
    name = name.strip()
    if not name:
        raise RuleViolationError("Player name must not be empty")
    if any(p.name == name for p in state.players):
        raise RuleViolationError(
            f'Player name "{name}" is already taken. Please choose a different name.'
        )
    state = state.clone()
    state.players.append(Player(id=actor_id, name=name))
    return state


def ready(state: GameState, actor_id: str, settings: Settings = DEFAULT_SETTINGS) -> GameState:
    # Over capacity, not at capacity: a full room of five may still play
    if len(state.players) > settings.max_players:
        raise PhasePreconditionError("Room is full, cannot ready up")
    state = state.clone()
    _require_player(state, actor_id).ready = True
    return state


def start_game(
    state: GameState,
    actor_id: str,
    now: int,
    settings: Settings = DEFAULT_SETTINGS,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Deal a fresh table and flip the first non-wild discard."""
    if state.started:
        raise PhasePreconditionError("Game already in progress")
    _require_host(state, actor_id, "start")
    if len(state.players) < settings.min_players:
        raise PhasePreconditionError(f"Need at least {settings.min_players} players")
    # Over capacity, not at capacity: a full room of five may still play
    if len(state.players) > settings.max_players:
        raise PhasePreconditionError("Room is full, cannot start game")
    if not all(p.ready for p in state.players):
        raise PhasePreconditionError("All players must be ready")

    state = state.clone()
    _reset_table(state, clear_ready=False)
    deck = generate_deck(rng)
    for _ in range(settings.initial_hand_size):
        for p in state.players:
            p.hand.append(deck.pop())

    first = deck.pop()
    while first.value.is_wild:
        deck.insert(0, first)
        deck = shuffle(deck, rng)
        first = deck.pop()

    state.deck = deck
    state.discard_pile = [first]
    state.started = True
    state.last_action_timestamp = now
    return state


def end_game(state: GameState, actor_id: str) -> GameState:
    """Back to the lobby, keeping the roster."""
    _require_host(state, actor_id, "end")
    state = state.clone()
    _reset_table(state, clear_ready=True)
    return state


def restart_game(state: GameState, actor_id: str, settings: Settings = DEFAULT_SETTINGS) -> GameState:
    _require_host(state, actor_id, "restart")
    if len(state.players) < settings.min_players:
        raise PhasePreconditionError(f"Need at least {settings.min_players} players to restart")
    state = state.clone()
    _reset_table(state, clear_ready=True)
    return state


def _play(
    state: GameState,
    actor_id: str,
    card_id: str,
    chosen_color: Optional[Color],
    now: int,
    settings: Settings,
    rng: Optional[random.Random],
    drawn_only: bool,
) -> GameState:
    state = state.clone()
    player = _require_turn(state, actor_id)

    pending = state.pending_decision
    if drawn_only and (pending is None or pending.player_id != actor_id or pending.card_id != card_id):
        raise RuleViolationError("You can only play the card you just drew")
    if pending is not None and pending.card_id != card_id:
        raise RuleViolationError("Play or keep the card you just drew")

    card = player.find_card(card_id)
    if card is None:
        raise NotFoundError("Card not in hand")
    if not is_playable(card, state.top_discard(), player.hand):
        raise RuleViolationError("Invalid card play")

    played = card
    if card.value.is_wild:
        if chosen_color is None:
            raise RuleViolationError("Must choose a color for wild card")
        try:
            played = card.with_color(chosen_color)
        except ValueError as exc:
            raise RuleViolationError(str(exc)) from None

    player.hand.remove(card)
    state.discard_pile.append(played)
    state.pending_decision = None

    turn_advanced = apply_effect(played, state, rng)
    for p in state.players:
        sync_last_card(p, now)

    if not player.hand:
        state.started = False

    apply_uno_penalties(
        state,
        now,
        rng,
        window_ms=settings.uno_call_window_ms,
        penalty_cards=settings.uno_penalty_cards,
    )
    if state.started and not turn_advanced:
        advance(state)
    state.last_action_timestamp = now
    return state


def play_card(
    state: GameState,
    actor_id: str,
    card_id: str,
    chosen_color: Optional[Color],
    now: int,
    settings: Settings = DEFAULT_SETTINGS,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Play a card from hand, resolve its effect and pass the turn."""
    return _play(state, actor_id, card_id, chosen_color, now, settings, rng, drawn_only=False)


def play_drawn_card(
    state: GameState,
    actor_id: str,
    card_id: str,
    chosen_color: Optional[Color],
    now: int,
    settings: Settings = DEFAULT_SETTINGS,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Play the card offered by the preceding draw."""
    return _play(state, actor_id, card_id, chosen_color, now, settings, rng, drawn_only=True)


def draw_card(
    state: GameState,
    actor_id: str,
    now: int,
    rng: Optional[random.Random] = None,
) -> ActionResult:
    """Draw one card.

    A playable draw is offered back to the actor and the turn waits for
    their decision; otherwise the turn passes at once. With nothing left
    to reshuffle no card is drawn and the turn does not move.
    """
    state = state.clone()
    player = _require_turn(state, actor_id)
    if state.pending_decision is not None:
        raise RuleViolationError("You already drew a card; play it or keep it")

    drawn = draw_cards(state, player, 1, rng)
    sync_last_card(player, now)
    state.last_action_timestamp = now

    if not drawn:
        # Nothing left to reshuffle: hand and turn stay as they are
        return ActionResult(state=state)

    if is_playable(drawn[0], state.top_discard(), player.hand):
        state.pending_decision = PendingDecision(player_id=actor_id, card_id=drawn[0].id)
        return ActionResult(state=state, drawn_card=drawn[0])

    advance(state)
    return ActionResult(state=state)


def keep_drawn_card(state: GameState, actor_id: str, now: int) -> GameState:
    """Keep the drawn card in hand and end the turn."""
    state = state.clone()
    _require_turn(state, actor_id)
    pending = state.pending_decision
    if pending is None or pending.player_id != actor_id:
        raise RuleViolationError("No drawn card to keep")
    advance(state)
    state.last_action_timestamp = now
    return state


def call_uno(state: GameState, actor_id: str) -> GameState:
    state = state.clone()
    player = _require_player(state, actor_id)
    if len(player.hand) != 1:
        raise RuleViolationError("Can only call UNO with one card")
    player.called_uno = True
    return state


def disconnect(state: GameState, player_id: str, rng: Optional[random.Random] = None) -> GameState:
    """Remove a departed player and repair the turn pointer.

    A started game left with a single player returns to the lobby. The
    departing hand goes under the deck so no card leaves the table.
    """
    index = state.player_index(player_id)
    if index == -1:
        return state
    state = state.clone()
    leaver = state.players.pop(index)
    if not state.players:
        return GameState()

    pending = state.pending_decision
    if pending is not None and pending.player_id == leaver.id:
        state.pending_decision = None

    if state.started:
        if leaver.hand:
            state.deck[0:0] = shuffle(leaver.hand, rng)
        if index < state.current_player_index:
            state.current_player_index -= 1
        if state.current_player_index >= len(state.players):
            state.current_player_index = 0
        if len(state.players) == 1:
            _reset_table(state, clear_ready=True)
    return state


def reconcile(state: GameState, live_ids: Iterable[str], rng: Optional[random.Random] = None) -> GameState:
    """Drop players whose connections are gone."""
    live = set(live_ids)
    for stale in [p.id for p in state.players if p.id not in live]:
        state = disconnect(state, stale, rng)
    return state
