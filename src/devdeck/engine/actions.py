# src/devdeck/engine/actions.py
"""
Action resolvers. Each one is a transition over the GameState: it mutates
players, deck and discard, bumps the run counters, and returns the events
it produced. Timed events carry their cost in "secs".
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from devdeck.constants import NOPE_SETBACK, NOPE_STEAL
from devdeck.engine.eval import closest_structure, find_trade_partner, trade_offer
from devdeck.model.card import Card, Structure
from devdeck.model.game import GameState
from devdeck.model.player import PlayerState

Event = Dict[str, Any]


def _ev(g: GameState, kind: str, p: PlayerState, **kw) -> Event:
    rec: Event = {"a": kind, "t": g.turn, "p": p.id, "name": p.name}
    rec.update(kw)
    return rec


# ----------------------------
# Nope
# ----------------------------

def check_for_nope(g: GameState, initiator: PlayerState, action: str) -> Optional[Event]:
    """
    Returns the nope event if the action is canceled, else None.

    setback: only the initiator may cancel, spending a nope card on a
             fair coin.
    other:   the first other player (seat order) holding a nope card
             always cancels.
    """
    if action == NOPE_SETBACK:
        if initiator.nope_cards > 0 and g.rng.random() < 0.5:
            initiator.nope_cards -= 1
            g.nopes += 1
            return _ev(g, "nope", initiator, action=action,
                       target=initiator.id, target_name=initiator.name,
                       secs=g.cfg.duration("nope"))
        return None

    for other in g.others(initiator):
        if other.nope_cards > 0:
            other.nope_cards -= 1
            g.nopes += 1
            return _ev(g, "nope", other, action=action,
                       target=initiator.id, target_name=initiator.name,
                       secs=g.cfg.duration("nope"))
    return None


# ----------------------------
# Setback
# ----------------------------

def deduct_resources(g: GameState, p: PlayerState) -> List[Event]:
    """
    Lose half the hand (rounded down), draining resource types in catalog
    order one unit at a time. Lost units go to the discard pile.
    """
    penalty = p.total_resources() // 2
    lost = 0
    for res in g.cfg.resources:
        if lost >= penalty:
            break
        while lost < penalty and p.resources.get(res, 0) > 0:
            p.resources[res] -= 1
            g.discard.append(Card.of_resource(res))
            lost += 1
    return [_ev(g, "lose_resources", p, n=lost)]


def apply_setback(g: GameState, p: PlayerState, card: Card) -> List[Event]:
    """
    Resolve a drawn setback card. The player may nope it first. If they own
    the threatened structure a coin decides between losing resources and
    losing the structure; otherwise they lose resources. The setback card
    ends up in the discard pile either way.
    """
    sb = card.setback
    nope = check_for_nope(g, p, NOPE_SETBACK)
    if nope is not None:
        g.discard.append(card)
        return [nope]

    events: List[Event] = [_ev(g, "setback", p, structure=sb.structure, label=sb.name,
                               secs=g.cfg.duration("setback"))]
    g.setbacks += 1

    lose_resources = True
    if p.owns(sb.structure):
        lose_resources = g.rng.random() > 0.5

    if lose_resources:
        events.extend(deduct_resources(g, p))
    else:
        p.built.remove(sb.structure)
        events.append(_ev(g, "destroy", p, structure=sb.structure))

    g.discard.append(card)
    return events


# ----------------------------
# Steal
# ----------------------------

def can_steal(p: PlayerState) -> bool:
    return p.steal_cards > 0 and len(p.built) > 2


def steal_target(g: GameState, thief: PlayerState) -> Optional[PlayerState]:
    for other in g.others(thief):
        if other.built:
            return other
    return None


def steal_structure(g: GameState, thief: PlayerState, target: PlayerState) -> List[Event]:
    """
    Take the last of target's structures thief does not own yet. The thief
    skips their next turn and spends a steal card. Nothing stealable is a
    logged no-op that spends no card.
    """
    stealable = [s for s in target.built if not thief.owns(s)]
    secs = g.cfg.duration("steal")
    if not stealable:
        return [_ev(g, "steal", thief, target=target.id, target_name=target.name,
                    structure=None, secs=secs)]

    stolen = stealable.pop()
    thief.built.append(stolen)
    thief.skip_turn = True
    thief.steal_cards -= 1
    return [_ev(g, "steal", thief, target=target.id, target_name=target.name,
                structure=stolen, secs=secs)]


def attempt_steal(g: GameState, p: PlayerState) -> List[Event]:
    if not can_steal(p):
        return []
    target = steal_target(g, p)
    if target is None:
        return [_ev(g, "steal_no_target", p)]

    # The check runs on behalf of the target: anyone but the target may block.
    nope = check_for_nope(g, target, NOPE_STEAL)
    if nope is not None:
        return [nope]

    g.steals += 1
    return steal_structure(g, p, target)


# ----------------------------
# Trade
# ----------------------------

def can_trade(p: PlayerState) -> bool:
    return p.trade_cards > 0 and p.total_resources() > 1


def perform_trade(g: GameState, a: PlayerState, b: PlayerState,
                  sa: Structure, sb: Structure) -> List[Event]:
    """
    Swap one unit each way. Only the initiator spends a trade card.
    """
    offer = trade_offer(a, b, sa, sb)
    if offer is None:
        return []
    a_gives, b_gives = offer

    a.resources[a_gives] -= 1
    b.resources[a_gives] = b.held(a_gives) + 1
    b.resources[b_gives] -= 1
    a.resources[b_gives] = a.held(b_gives) + 1

    a.trade_cards -= 1
    return [_ev(g, "trade", a, partner=b.id, partner_name=b.name,
                gave=a_gives, received=b_gives, secs=g.cfg.duration("trade"))]


def attempt_trade(g: GameState, p: PlayerState) -> List[Event]:
    if not can_trade(p):
        return []
    partner = find_trade_partner(p, g.players, g.structures)
    if partner is None or partner.total_resources() <= 1:
        return []

    mine = closest_structure(p, g.structures)
    theirs = closest_structure(partner, g.structures)
    if trade_offer(p, partner, mine, theirs) is None:
        return [_ev(g, "trade_impossible", p, partner=partner.id, partner_name=partner.name)]

    nope = check_for_nope(g, p, g.cfg.trade_nope_label)
    if nope is not None:
        return [nope]

    events = perform_trade(g, p, partner, mine, theirs)
    if events:
        g.trades += 1
    return events


# ----------------------------
# Build / win
# ----------------------------

def can_build_structure(p: PlayerState, s: Structure) -> bool:
    return all(p.held(res) >= need for res, need in s.cost.items())


def build_structure(g: GameState, p: PlayerState, s: Structure) -> List[Event]:
    for res, need in s.cost.items():
        p.resources[res] = p.held(res) - need
        g.discard.extend(Card.of_resource(res) for _ in range(need))
    p.built.append(s.name)
    return [_ev(g, "build", p, structure=s.name, secs=g.cfg.duration("build"))]


def build_all(g: GameState, p: PlayerState) -> List[Event]:
    """Build every affordable unbuilt structure, in catalog order."""
    events: List[Event] = []
    for s in g.structures:
        if not p.owns(s.name) and can_build_structure(p, s):
            events.extend(build_structure(g, p, s))
    return events


def check_win_condition(p: PlayerState, structures) -> bool:
    return {s.name for s in structures} <= set(p.built)
