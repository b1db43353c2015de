"""Tests for the turn engine."""

from devdeck.engine.rounds import play_round, take_turn
from devdeck.model.card import Card


def _kinds(events):
    return [e["a"] for e in events]


class TestTakeTurn:
    """Phase order within a single player's turn."""

    def test_skip_clears_flag_and_does_nothing(self, game):
        p = game.players[0]
        p.skip_turn = True
        deck_before = len(game.deck)
        events = take_turn(game, p)
        assert _kinds(events) == ["turn_start", "skip"]
        assert not p.skip_turn
        assert len(game.deck) == deck_before
        assert sum(e.get("secs", 0) for e in events) == 0

    def test_resource_draw_adds_to_hand(self, game):
        p = game.players[0]
        game.deck.append(Card.of_resource("function"))
        events = take_turn(game, p)
        assert p.resources["function"] == 1
        assert _kinds(events) == ["turn_start", "draw"]

    def test_draw_then_build(self, game, give):
        p = give(game.players[0], {"array": 2})
        game.deck.append(Card.of_resource("variable"))
        events = take_turn(game, p)
        assert _kinds(events) == ["turn_start", "draw", "build"]
        assert p.built == ["Sprite"]

    def test_setback_drawn_goes_through_resolver(self, game, give, scripted):
        p = give(game.players[0], {"class": 4})
        p.nope_cards = 0
        game.rng = scripted([])
        # reference deck ends with the Collision setback on top
        assert game.deck[-1].is_setback
        events = take_turn(game, p)
        assert _kinds(events)[:4] == ["turn_start", "draw", "setback", "lose_resources"]
        assert p.resources["class"] == 2

    def test_win_is_flagged(self, game, give):
        p = give(game.players[0], {"variable": 2, "array": 1})
        p.built = ["Sprite", "Collision", "State Machine"]
        p.steal_cards = 0
        game.deck.append(Card.of_resource("class"))
        events = take_turn(game, p)
        assert _kinds(events)[-2:] == ["build", "win"]
        assert game.winner == 0

    def test_header_snapshot(self, game):
        p = game.players[1]
        game.deck.append(Card.of_resource("class"))
        head = take_turn(game, p)[0]
        assert head["deck"] == 37
        assert (head["trade"], head["steal"], head["nope"]) == (2, 1, 1)
        assert head["structures"] == 4


class TestPlayRound:
    """Seat order, time accounting and the early stop on a win."""

    def test_turn_counter_and_time(self, game):
        for res in ("variable", "class", "function", "array"):
            game.deck.append(Card.of_resource(res))
        won = play_round(game)
        assert not won
        assert game.turn == 1
        assert game.total_time == 4 * game.cfg.time_per_action["draw"]
        assert game.total_time == game.log.seconds()

    def test_stops_at_first_winner(self, game, give):
        p = give(game.players[1], {"variable": 2, "array": 1})
        p.built = ["Sprite", "Collision", "State Machine"]
        p.steal_cards = 0
        game.deck.append(Card.of_resource("class"))       # Player 2
        game.deck.append(Card.of_resource("function"))    # Player 1
        won = play_round(game)
        assert won
        assert game.winner == 1
        seats = {e["p"] for e in game.log.records if e["a"] == "turn_start"}
        assert seats == {0, 1}

    def test_skipped_player_costs_no_time(self, game):
        game.players[0].skip_turn = True
        for res in ("variable", "class", "function"):
            game.deck.append(Card.of_resource(res))
        play_round(game)
        assert game.total_time == 3 * game.cfg.time_per_action["draw"]
