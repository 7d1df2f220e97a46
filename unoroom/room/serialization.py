"""GameState <-> JSON-compatible dicts, using the wire field names."""

from typing import Any, Dict, Optional

from unoroom.engine.card import Card, Color, Value
from unoroom.engine.game_state import GameState, PendingDecision, Player


def card_to_dict(card: Card) -> Dict[str, Any]:
    return {"id": card.id, "color": card.color.value, "value": card.value.value}


def card_from_dict(d: Dict[str, Any]) -> Card:
    return Card(id=d["id"], color=Color(d["color"]), value=Value(d["value"]))


def _player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "hand": [card_to_dict(c) for c in player.hand],
        "ready": player.ready,
        "lastCardTimestamp": player.last_card_timestamp,
        "calledUno": player.called_uno,
    }


def _player_from_dict(d: Dict[str, Any]) -> Player:
    return Player(
        id=d["id"],
        name=d["name"],
        hand=[card_from_dict(c) for c in d.get("hand", [])],
        ready=bool(d.get("ready", False)),
        last_card_timestamp=d.get("lastCardTimestamp"),
        called_uno=bool(d.get("calledUno", False)),
    )


def _pending_from_dict(d: Optional[Dict[str, Any]]) -> Optional[PendingDecision]:
    if not d:
        return None
    return PendingDecision(player_id=d["playerId"], card_id=d["cardId"])


def state_to_dict(state: GameState) -> Dict[str, Any]:
    pending = state.pending_decision
    return {
        "players": [_player_to_dict(p) for p in state.players],
        "deck": [card_to_dict(c) for c in state.deck],
        "discardPile": [card_to_dict(c) for c in state.discard_pile],
        "currentPlayerIndex": state.current_player_index,
        "direction": state.direction,
        "started": state.started,
        "lastActionTimestamp": state.last_action_timestamp,
        "pendingDecision": (
            {"playerId": pending.player_id, "cardId": pending.card_id} if pending else None
        ),
    }


def state_from_dict(d: Dict[str, Any]) -> GameState:
    return GameState(
        players=[_player_from_dict(p) for p in d.get("players", [])],
        deck=[card_from_dict(c) for c in d.get("deck", [])],
        discard_pile=[card_from_dict(c) for c in d.get("discardPile", [])],
        current_player_index=int(d.get("currentPlayerIndex", 0)),
        direction=int(d.get("direction", 1)),
        started=bool(d.get("started", False)),
        last_action_timestamp=d.get("lastActionTimestamp"),
        pending_decision=_pending_from_dict(d.get("pendingDecision")),
    )
