"""End-to-end tests through the room dispatcher."""

import json
import random

import pytest

from unoroom.engine import GameState
from unoroom.engine import actions
from unoroom.room import InMemoryStateStore, JsonFileStateStore, LocalTransport, RoomDispatcher
from unoroom.room.messages import DrawnCardMessage, ErrorMessage, StateMessage


class Room:
    """A dispatcher wired to local collaborators with a controllable clock."""

    def __init__(self, store=None, seed=7):
        self.now = 1_000
        self.store = store or InMemoryStateStore()
        self.transport = LocalTransport()
        self.dispatcher = RoomDispatcher(
            "room-1",
            self.store,
            self.transport,
            clock=lambda: self.now,
            rng=random.Random(seed),
        )

    def connect(self, *conn_ids):
        for cid in conn_ids:
            self.transport.attach(cid)
            self.dispatcher.on_connect(cid)

    def close(self, conn_id):
        self.transport.detach(conn_id)
        self.dispatcher.on_close(conn_id)

    def send(self, conn_id, **message):
        self.dispatcher.on_message(conn_id, json.dumps(message))

    @property
    def state(self) -> GameState:
        return self.store.get("room-1")

    def errors(self, conn_id):
        return [m for m in self.transport.outboxes[conn_id] if isinstance(m, ErrorMessage)]

    def start(self, *names):
        conn_ids = [f"c{i + 1}" for i in range(len(names))]
        self.connect(*conn_ids)
        for cid, name in zip(conn_ids, names):
            self.send(cid, type="join", name=name)
        for cid in conn_ids:
            self.send(cid, type="ready")
        self.send(conn_ids[0], type="startGame")
        return conn_ids


def test_connect_creates_room_and_syncs_state() -> None:
    room = Room()
    room.connect("c1")
    assert room.state == GameState()
    [msg] = room.transport.outboxes["c1"]
    assert isinstance(msg, StateMessage)
    assert msg.state["players"] == []
    assert msg.state["started"] is False


def test_scenario_a_two_players_start() -> None:
    room = Room()
    room.start("P1", "P2")
    state = room.state
    assert state.started
    assert [len(p.hand) for p in state.players] == [7, 7]
    assert len(state.discard_pile) == 1
    assert not state.top_discard().value.is_wild
    assert len(state.deck) == 93
    assert room.errors("c1") == [] and room.errors("c2") == []


def test_state_is_broadcast_to_everyone() -> None:
    room = Room()
    room.connect("c1", "c2")
    room.transport.drain("c1")
    room.transport.drain("c2")
    room.send("c1", type="join", name="Ann")
    for cid in ("c1", "c2"):
        [msg] = room.transport.outboxes[cid]
        assert msg.state["players"][0]["name"] == "Ann"


def _rig(room, hands, top, current=0):
    """Replace the stored table with hand-picked cards (full deck kept)."""
    state = room.state
    by_id = {}
    for c in state.deck + state.discard_pile + [c for p in state.players for c in p.hand]:
        by_id[c.id] = c
    used = {cid for hand in hands for cid in hand} | {top}
    for player, hand in zip(state.players, hands):
        player.hand = [by_id[cid] for cid in hand]
    state.discard_pile = [by_id[top]]
    state.deck = [c for cid, c in by_id.items() if cid not in used]
    state.current_player_index = current
    room.store.put("room-1", state)


def test_scenario_b_skip_in_two_player_game() -> None:
    room = Room()
    room.start("P1", "P2")
    _rig(room, [["red-skip-1", "blue-1-1"], ["green-1-1", "green-2-1"]], top="red-5-1")

    room.send("c1", type="playCard", cardId="red-skip-1")

    assert room.errors("c1") == []
    assert room.state.current_player_index == 0
    assert room.state.card_count() == 108


def test_scenario_c_draw_two_in_three_player_game() -> None:
    room = Room()
    room.start("P1", "P2", "P3")
    _rig(
        room,
        [["red-draw_two-1", "blue-1-1"], ["green-1-1"], ["yellow-1-1"]],
        top="red-5-1",
    )

    room.send("c1", type="playCard", cardId="red-draw_two-1")

    state = room.state
    assert len(state.players[1].hand) == 3
    assert state.current_player_index == 2
    assert state.card_count() == 108


def test_scenario_d_disconnect_leaves_single_player_in_lobby() -> None:
    room = Room()
    room.start("P1", "P2")
    room.close("c2")
    state = room.state
    assert not state.started
    assert [p.name for p in state.players] == ["P1"]
    assert state.players[0].hand == []
    last = room.transport.outboxes["c1"][-1]
    assert isinstance(last, StateMessage) and last.state["started"] is False


def test_errors_go_only_to_sender_and_change_nothing() -> None:
    room = Room()
    room.start("P1", "P2")
    before = room.state
    room.transport.drain("c1")
    room.transport.drain("c2")

    room.send("c2", type="drawCard")

    [err] = room.transport.outboxes["c2"]
    assert isinstance(err, ErrorMessage)
    assert err.message == "Not your turn"
    assert err.code == "authorization_denied"
    assert room.transport.outboxes["c1"] == []
    assert room.state == before


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("not json", "Invalid message format"),
        ("[1, 2]", "Invalid message format"),
        (json.dumps({"type": "dance"}), "Unknown message type"),
        (json.dumps({"name": "x"}), "Unknown message type"),
    ],
)
def test_malformed_messages(raw, expected) -> None:
    room = Room()
    room.connect("c1")
    room.dispatcher.on_message("c1", raw)
    [err] = room.errors("c1")
    assert err.message == expected
    assert err.code == "malformed_message"


def test_missing_field_is_malformed() -> None:
    room = Room()
    room.start("P1", "P2")
    room.send("c1", type="playCard")
    [err] = room.errors("c1")
    assert err.code == "malformed_message"
    assert "cardId" in err.message


def test_fault_mid_handler_persists_nothing(monkeypatch) -> None:
    room = Room()
    room.start("P1", "P2")
    _rig(room, [["red-7-1", "blue-1-1"], ["green-1-1"]], top="red-5-1")
    before = room.state

    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr("unoroom.engine.actions.apply_effect", boom)
    room.send("c1", type="playCard", cardId="red-7-1")

    [err] = room.errors("c1")
    assert err.message == "Internal error"
    assert room.state == before


def test_drawn_playable_card_is_offered_privately() -> None:
    room = Room()
    room.start("P1", "P2")
    _rig(room, [["blue-1-1", "blue-2-1"], ["green-1-1"]], top="red-5-1")
    state = room.state
    red_nine = next(c for c in state.deck if c.id == "red-9-1")
    state.deck = [c for c in state.deck if c is not red_nine] + [red_nine]
    room.store.put("room-1", state)
    room.transport.drain("c1")
    room.transport.drain("c2")

    room.send("c1", type="drawCard")

    drawn = [m for m in room.transport.outboxes["c1"] if isinstance(m, DrawnCardMessage)]
    assert [m.card["id"] for m in drawn] == ["red-9-1"]
    assert not any(isinstance(m, DrawnCardMessage) for m in room.transport.outboxes["c2"])
    assert room.state.current_player_index == 0
    assert room.state.pending_decision.card_id == "red-9-1"

    room.send("c1", type="playDrawnCard", cardId="red-9-1")
    assert room.state.current_player_index == 1
    assert room.state.top_discard().id == "red-9-1"


def test_penalty_through_dispatcher() -> None:
    room = Room()
    room.start("P1", "P2")
    _rig(room, [["red-7-1", "blue-1-1"], ["red-8-1", "green-2-1", "green-3-1"]], top="red-5-1")

    room.send("c1", type="playCard", cardId="red-7-1")
    room.now += 10_001
    room.send("c2", type="playCard", cardId="red-8-1")

    assert len(room.state.players[0].hand) == 3


def test_call_uno_through_dispatcher() -> None:
    room = Room()
    room.start("P1", "P2")
    _rig(room, [["red-7-1", "blue-1-1"], ["red-8-1", "green-2-1", "green-3-1"]], top="red-5-1")

    room.send("c1", type="playCard", cardId="red-7-1")
    room.send("c1", type="callUno")
    room.now += 20_000
    room.send("c2", type="playCard", cardId="red-8-1")

    assert room.errors("c1") == []
    assert len(room.state.players[0].hand) == 1


def test_first_connect_drops_stale_players() -> None:
    store = InMemoryStateStore()
    stale = actions.join(actions.join(GameState(), "old1", "Ghost"), "old2", "Phantom")
    store.put("room-1", stale)

    room = Room(store=store)
    room.connect("c1")

    assert room.state.players == []


def test_json_file_store_keeps_room_across_dispatchers(tmp_path) -> None:
    room = Room(store=JsonFileStateStore(tmp_path))
    room.start("P1", "P2")
    saved = room.state

    reloaded = JsonFileStateStore(tmp_path).get("room-1")
    assert reloaded == saved
    assert (tmp_path / "room-1.json").exists()


def test_json_file_store_keeps_similar_keys_apart(tmp_path) -> None:
    store = JsonFileStateStore(tmp_path)
    store.put("room/1", actions.join(GameState(), "c1", "Ann"))
    store.put("room_1", actions.join(GameState(), "c2", "Bob"))

    assert [p.name for p in store.get("room/1").players] == ["Ann"]
    assert [p.name for p in store.get("room_1").players] == ["Bob"]
    assert len(list(tmp_path.glob("*.json"))) == 2
