from typing import Any, Dict, Iterable, List


class EventLog:
    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def emit(self, rec: Dict[str, Any]) -> None:
        self.records.append(rec)

    def extend(self, recs: Iterable[Dict[str, Any]]) -> None:
        self.records.extend(recs)

    def seconds(self) -> int:
        """Sum of the durations carried by timed events."""
        return sum(int(r.get("secs", 0)) for r in self.records)


def _line(e: Dict[str, Any]) -> str:
    a = e.get("a")
    if a == "turn_start":
        return (f"Turn {e['t']}, {e['name']}, cards: {e['cards']}, deck: {e['deck']}, "
                f"discard: {e['discard']}, structures: {e['built']}/{e['structures']}, "
                f"trade: {e['trade']}, steal: {e['steal']}, nope: {e['nope']}.")
    if a == "skip":
        return "  Skips turn due to previous steal."
    if a == "reshuffle":
        return "  Shuffling discard pile into deck."
    if a == "draw":
        if e.get("kind") == "setback":
            return f"  Drew setback: {e['card']}"
        return f"  Drew resource: {e['card']}."
    if a == "nope":
        if e.get("action") == "setback":
            return f"  {e['name']} noped the setback!"
        return f"  {e['name']} noped {e['target_name']}'s {e['action']}!"
    if a == "lose_resources":
        return f"  Lost {e['n']} resource(s)."
    if a == "destroy":
        return f"  {e['structure']} destroyed."
    if a == "steal":
        if e.get("structure") is None:
            return f"  Tried to steal from {e['target_name']}, but there's nothing to steal!"
        return (f"  Stole {e['structure']} from {e['target_name']} "
                "and will skip their next turn.")
    if a == "steal_no_target":
        return "  Nobody has a structure to steal."
    if a == "trade_impossible":
        return f"  Trade not possible between {e['name']} and {e['partner_name']}."
    if a == "trade":
        return (f"  Gave {e['gave']} to {e['partner_name']}.\n"
                f"  Received {e['received']} from {e['partner_name']}.")
    if a == "build":
        return f"  Built {e['structure']}."
    if a == "win":
        return "  Wins the game!"
    if a == "game_end":
        return (f"\nGame won in {e['t']} turns with {e['trades']} trades, {e['steals']} steals, "
                f"{e['nopes']} nopes, and {e['setbacks']} setbacks in {e['secs_total']} seconds.")
    if a == "non_convergent":
        return f"  No winner after {e['t']} turns."
    return ""


def format_events(records: Iterable[Dict[str, Any]]) -> str:
    """
    Human-readable per-turn summary. Only used for diagnostics; the
    structured records are the source of truth.
    """
    lines = []
    turn = None
    turn_secs = 0
    for e in records:
        if e.get("a") == "game_start":
            continue
        t = e.get("t")
        if turn is not None and t != turn:
            lines.append(f"Total turn time: {turn_secs} seconds.\n")
            turn_secs = 0
        turn = t
        turn_secs += int(e.get("secs", 0))
        s = _line(e)
        if s:
            lines.append(s)
    if turn is not None:
        lines.append(f"Total turn time: {turn_secs} seconds.")
    return "\n".join(lines)
