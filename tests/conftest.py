"""Shared fixtures: hand-built tables with the full 108-card deck."""

import random

import pytest

from unoroom.engine import GameState, Player, generate_deck


@pytest.fixture
def make_table():
    """Build a started state with chosen hands and top card.

    ``hands`` is a list of card-id lists, one per player (ids ``p1``, ``p2``...,
    names ``P1``, ``P2``...). Every card not placed goes to the deck, so the
    table always holds all 108 cards.
    """

    def _make(hands, top, current=0, direction=1, seed=0, deck_ids=None):
        by_id = {c.id: c for c in generate_deck(random.Random(seed))}
        used = [cid for hand in hands for cid in hand] + [top]
        assert len(set(used)) == len(used), "card used twice"
        players = [
            Player(id=f"p{i + 1}", name=f"P{i + 1}", hand=[by_id[cid] for cid in hand], ready=True)
            for i, hand in enumerate(hands)
        ]
        remaining = [c for c in by_id.values() if c.id not in set(used)]
        discard = [by_id[top]]
        if deck_ids is not None:
            # Explicit deck (top of deck last); everything else under the top discard
            deck = [by_id[cid] for cid in deck_ids]
            discard = [c for c in remaining if c.id not in set(deck_ids)] + discard
        else:
            deck = remaining
        return GameState(
            players=players,
            deck=deck,
            discard_pile=discard,
            current_player_index=current,
            direction=direction,
            started=True,
        )

    return _make
