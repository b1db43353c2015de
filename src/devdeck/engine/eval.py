# --- in src/devdeck/engine/eval.py ---
"""
Heuristics simulated players use to pick trades. These are scripted
rules of thumb, not a search: every scan is first-match in a fixed order.
"""
from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from devdeck.model.card import Structure
from devdeck.model.player import PlayerState


def missing_resources(p: PlayerState, s: Structure) -> int:
    """Units still missing before p could build s."""
    return sum(max(0, need - p.held(res)) for res, need in s.cost.items())


def closest_structure(p: PlayerState, structures: Sequence[Structure]) -> Optional[Structure]:
    """
    Unbuilt structure with the fewest missing units; the first in catalog
    order wins a tie. None once p owns everything.
    """
    closest = None
    best = None
    for s in structures:
        if p.owns(s.name):
            continue
        missing = missing_resources(p, s)
        if best is None or missing < best:
            best = missing
            closest = s
    return closest


def _first_gift(giver: PlayerState, receiver: PlayerState, target: Structure) -> Optional[str]:
    """First resource in target's cost that giver holds and receiver still lacks."""
    for res, need in target.cost.items():
        if giver.held(res) > 0 and need - receiver.held(res) > 0:
            return res
    return None


def trade_offer(a: PlayerState, b: PlayerState,
                sa: Structure, sb: Structure) -> Optional[Tuple[str, str]]:
    """
    Returns (a_gives, b_gives) when a one-for-one swap of different
    resource types moves both players toward their target, else None.
    """
    b_gives = _first_gift(b, a, sa)
    a_gives = _first_gift(a, b, sb)
    if a_gives is None or b_gives is None or a_gives == b_gives:
        return None
    return a_gives, b_gives


def can_help(a: PlayerState, b: PlayerState, sa: Structure, sb: Structure) -> bool:
    return trade_offer(a, b, sa, sb) is not None


def find_trade_partner(current: PlayerState, players: List[PlayerState],
                       structures: Sequence[Structure]) -> Optional[PlayerState]:
    """First other player (seat order) holding a trade card whose own target makes the swap mutual."""
    mine = closest_structure(current, structures)
    if mine is None:
        return None

    for other in players:
        if other is current or other.trade_cards <= 0:
            continue
        theirs = closest_structure(other, structures)
        if theirs is None:
            continue
        if can_help(current, other, mine, theirs):
            return other
    return None
