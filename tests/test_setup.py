"""Tests for deck creation, drawing and game setup."""

import random
from collections import Counter

import pytest

from devdeck.config import Config
from devdeck.constants import RES
from devdeck.engine.setup import create_deck, draw, draw_card, setup
from devdeck.errors import DeckExhausted
from devdeck.model.card import Card
from devdeck.model.player import PlayerState


def _expected(cfg):
    want = Counter()
    for res, n in cfg.resource_deck.items():
        want[Card.of_resource(res)] += n
    for sb in cfg.setbacks:
        want[Card.of_setback(sb)] += 1
    return want


class TestCreateDeck:
    """One card per resource unit plus one per setback, shuffled."""

    def test_reference_deck_has_36_cards(self, cfg):
        deck = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(1))
        assert len(deck) == 36
        assert sum(c.is_setback for c in deck) == 4

    @pytest.mark.parametrize("seed", [0, 1, 7, 42])
    def test_multiset_matches_config(self, cfg, seed):
        deck = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(seed))
        assert Counter(deck) == _expected(cfg)

    def test_custom_counts(self):
        cfg = Config(resource_deck={"variable": 3, "class": 0, "function": 1, "array": 2})
        deck = create_deck(cfg.resource_deck, cfg.setbacks[:1], random.Random(3))
        assert Counter(c.label for c in deck if c.is_resource) == {"variable": 3, "function": 1, "array": 2}
        assert len(deck) == 7

    def test_same_seed_same_order(self, cfg):
        a = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(5))
        b = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(5))
        assert a == b

    def test_different_seeds_reorder(self, cfg):
        a = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(5))
        b = create_deck(cfg.resource_deck, cfg.setbacks, random.Random(6))
        assert a != b
        assert Counter(a) == Counter(b)


class TestDrawCard:
    """Top-of-stack draws and the reshuffle protocol."""

    def test_draws_top_card(self):
        top = Card.of_resource("array")
        deck = [Card.of_resource("variable"), top]
        card, reshuffled = draw_card(deck, [], random.Random(0))
        assert card == top
        assert not reshuffled
        assert len(deck) == 1

    def test_empty_deck_reshuffles_discard_once(self):
        discard = [Card.of_resource("class"), Card.of_resource("array"), Card.of_resource("function")]
        deck = []
        before = len(deck) + len(discard)
        card, reshuffled = draw_card(deck, discard, random.Random(0))
        assert reshuffled
        assert discard == []
        assert len(deck) == 2
        assert len(deck) + len(discard) + 1 == before

    def test_both_empty_raises(self):
        with pytest.raises(DeckExhausted):
            draw_card([], [], random.Random(0))


class TestDraw:
    """Game-level draw emits events and names the player on exhaustion."""

    def test_draw_event_carries_duration(self, game):
        p = game.players[0]
        game.deck.append(Card.of_resource("variable"))
        card, events = draw(game, p)
        assert card.resource == "variable"
        assert events[-1]["a"] == "draw"
        assert events[-1]["secs"] == game.cfg.time_per_action["draw"]

    def test_reshuffle_event_logged(self, game):
        p = game.players[0]
        game.discard.extend(game.deck)
        game.deck.clear()
        _, events = draw(game, p)
        assert [e["a"] for e in events] == ["reshuffle", "draw"]
        assert events[0]["n"] == 36

    def test_exhaustion_names_player(self, game):
        game.deck.clear()
        with pytest.raises(DeckExhausted) as exc:
            draw(game, game.players[2])
        assert exc.value.player == "Player 3"


class TestSetup:
    """Fresh game state."""

    def test_players_start_with_reference_cards(self, game):
        assert len(game.players) == 4
        for p in game.players:
            assert p.total_resources() == 0
            assert p.built == []
            assert (p.trade_cards, p.steal_cards, p.nope_cards) == (2, 1, 1)
            assert not p.skip_turn

    def test_names_follow_seats(self, game):
        assert [p.name for p in game.players] == ["Player 1", "Player 2", "Player 3", "Player 4"]

    def test_full_deck_empty_discard(self, game):
        assert len(game.deck) == 36
        assert game.discard == []
        assert game.cards_in_circulation() == 36

    def test_default_rng_is_seeded(self):
        cfg = Config(seed=11)
        assert setup(cfg).deck == setup(cfg).deck


class TestPlayerState:
    def test_defaults_follow_resource_order(self):
        p = PlayerState(id=2)
        assert list(p.resources) == list(RES)
        assert p.total_resources() == 0
        assert p.name == "Player 3"
