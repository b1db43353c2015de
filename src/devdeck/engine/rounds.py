# devdeck/engine/rounds.py
from typing import List

from devdeck.engine.actions import (
    Event, apply_setback, attempt_steal, attempt_trade, build_all, check_win_condition,
)
from devdeck.engine.setup import draw
from devdeck.model.game import GameState
from devdeck.model.player import PlayerState


def _turn_header(g: GameState, p: PlayerState) -> Event:
    return {
        "a": "turn_start", "t": g.turn, "p": p.id, "name": p.name,
        "cards": p.total_resources(), "deck": len(g.deck), "discard": len(g.discard),
        "built": len(p.built), "structures": len(g.structures),
        "trade": p.trade_cards, "steal": p.steal_cards, "nope": p.nope_cards,
    }


def take_turn(g: GameState, p: PlayerState) -> List[Event]:
    """
    One player's turn: draw, resolve the card, try a steal, try a trade,
    build whatever is affordable, check for the win.
    A player flagged by their own steal loses this turn instead.
    """
    events: List[Event] = [_turn_header(g, p)]

    if p.skip_turn:
        p.skip_turn = False
        events.append({"a": "skip", "t": g.turn, "p": p.id, "name": p.name})
        return events

    card, drawn = draw(g, p)
    events.extend(drawn)
    if card.is_resource:
        p.resources[card.resource] = p.held(card.resource) + 1
    else:
        events.extend(apply_setback(g, p, card))

    events.extend(attempt_steal(g, p))
    events.extend(attempt_trade(g, p))
    events.extend(build_all(g, p))

    if check_win_condition(p, g.structures):
        g.winner = p.id
        events.append({"a": "win", "t": g.turn, "p": p.id, "name": p.name})
    return events


def start_of_round(g: GameState) -> None:
    g.turn += 1


def play_round(g: GameState) -> bool:
    """
    Every player takes a turn in seat order. Stops at the first winner.
    Returns True once the game is won.
    """
    start_of_round(g)
    for p in g.players:
        events = take_turn(g, p)
        g.total_time += sum(int(e.get("secs", 0)) for e in events)
        g.log.extend(events)
        if g.winner is not None:
            return True
    return False
