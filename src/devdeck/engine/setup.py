# src/devdeck/engine/setup.py
from __future__ import annotations
import random
from typing import Any, Dict, List, Optional, Sequence, Tuple

from devdeck.config import Config
from devdeck.errors import DeckExhausted
from devdeck.model.card import Card, Setback
from devdeck.model.player import PlayerState as Player
from devdeck.model.game import GameState as Game


# ---------------- Helpers (deck / draw) ----------------
def shuffle(cards: List[Card], rng: random.Random) -> List[Card]:
    """In-place Fisher–Yates (last index down to 1), returns the same list."""
    rng.shuffle(cards)
    return cards


def create_deck(resource_deck: Dict[str, int], setbacks: Sequence[Setback],
                rng: random.Random) -> List[Card]:
    """One card per resource unit per type plus one per setback, shuffled."""
    deck: List[Card] = [Card.of_resource(res)
                        for res, n in resource_deck.items()
                        for _ in range(n)]
    deck.extend(Card.of_setback(sb) for sb in setbacks)
    return shuffle(deck, rng)


def draw_card(deck: List[Card], discard: List[Card], rng: random.Random) -> Tuple[Card, bool]:
    """
    Pop the top card. An empty deck takes the whole discard pile, shuffled,
    and the draw is retried once. Returns (card, reshuffled).
    """
    reshuffled = False
    if not deck:
        if not discard:
            raise DeckExhausted()
        deck.extend(shuffle(discard[:], rng))
        discard.clear()
        reshuffled = True
    return deck.pop(), reshuffled


def draw(g: Game, p: Player) -> Tuple[Card, List[Dict[str, Any]]]:
    events: List[Dict[str, Any]] = []
    n_discard = len(g.discard)
    try:
        card, reshuffled = draw_card(g.deck, g.discard, g.rng)
    except DeckExhausted:
        raise DeckExhausted(turn=g.turn, player=p.name) from None
    if reshuffled:
        events.append({"a": "reshuffle", "t": g.turn, "p": p.id, "n": n_discard})
    events.append({
        "a": "draw", "t": g.turn, "p": p.id,
        "kind": card.kind, "card": card.label,
        "secs": g.cfg.duration("draw"),
    })
    return card, events


def new_players(cfg: Config) -> List[Player]:
    players: List[Player] = []
    for pid in range(cfg.players):
        players.append(Player(
            id=pid,
            resources={r: 0 for r in cfg.resources},
            trade_cards=cfg.start_cards.get("trade", 0),
            steal_cards=cfg.start_cards.get("steal", 0),
            nope_cards=cfg.start_cards.get("nope", 0),
        ))
    return players


# ---------------- Setup ----------------
def setup(cfg: Config, rng: Optional[random.Random] = None) -> Game:
    rng = rng if rng is not None else random.Random(cfg.seed)
    deck = create_deck(cfg.resource_deck, cfg.setbacks, rng)
    g = Game(cfg=cfg, rng=rng, players=new_players(cfg), deck=deck, discard=[])
    g.emit({"a": "game_start", "t": 0, "seed": cfg.seed,
            "players": cfg.players, "deck": len(deck)})
    return g
