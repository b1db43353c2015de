from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import argparse

from devdeck.constants import (
    RES, STRUCTURES, RESOURCE_DECK, SETBACKS, TIME_PER_ACTION,
    SPECIAL_CARDS, START_CARDS, MAX_CARDS, TURN_CAP, PLAYERS,
    NOPE_STEAL, NOPE_TRADE,
)
from devdeck.errors import ConfigError
from devdeck.model.card import Structure, Setback


def default_structures() -> List[Structure]:
    return [Structure(name=n, cost=dict(c)) for n, c in STRUCTURES.items()]


def default_setbacks() -> List[Setback]:
    return [Setback(structure=s, name=n) for s, n in SETBACKS]


@dataclass
class Config:
    seed: int = 42
    games: int = 1000
    players: int = PLAYERS
    turn_cap: int = TURN_CAP

    # Rule set
    resources: Tuple[str, ...] = RES
    structures: List[Structure] = field(default_factory=default_structures)
    resource_deck: Dict[str, int] = field(default_factory=lambda: dict(RESOURCE_DECK))
    setbacks: List[Setback] = field(default_factory=default_setbacks)
    time_per_action: Dict[str, int] = field(default_factory=lambda: dict(TIME_PER_ACTION))
    start_cards: Dict[str, int] = field(default_factory=lambda: dict(START_CARDS))
    max_cards: Dict[str, int] = field(default_factory=lambda: dict(MAX_CARDS))

    # Label the trade resolver passes to the nope check. "steal" reproduces
    # the reference game; "trade" logs trades under their own label.
    trade_nope_label: str = NOPE_STEAL

    # Batch knobs
    workers: int = 1
    progress_every: int = 100
    out_dir: str = "summaries"
    write_logs: bool = False
    debug: bool = False

    @property
    def structure_names(self) -> List[str]:
        return [s.name for s in self.structures]

    def duration(self, action: str) -> int:
        return int(self.time_per_action.get(action, 0))


def validate_config(cfg: Config) -> Config:
    """
    Reject unusable rule sets before any game starts.
    Returns cfg unchanged so callers can chain it.
    """
    if not cfg.resources:
        raise ConfigError("resource catalog is empty")
    if len(set(cfg.resources)) != len(cfg.resources):
        raise ConfigError(f"duplicate resource types in {list(cfg.resources)}")

    if not cfg.structures:
        raise ConfigError("structure catalog is empty")
    names = cfg.structure_names
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise ConfigError(f"duplicate structure names: {dupes}")
    for s in cfg.structures:
        for res, units in s.cost.items():
            if res not in cfg.resources:
                raise ConfigError(f"structure {s.name!r} costs unknown resource {res!r}")
            if units < 0:
                raise ConfigError(f"structure {s.name!r} has negative cost {units} for {res!r}")
        if s.total_cost <= 0:
            raise ConfigError(f"structure {s.name!r} costs nothing")

    for res, n in cfg.resource_deck.items():
        if res not in cfg.resources:
            raise ConfigError(f"resource deck names unknown resource {res!r}")
        if n < 0:
            raise ConfigError(f"resource deck has negative count {n} for {res!r}")
    if sum(cfg.resource_deck.values()) + len(cfg.setbacks) == 0:
        raise ConfigError("deck would be empty")

    for sb in cfg.setbacks:
        if sb.structure not in names:
            raise ConfigError(f"setback {sb.name!r} refers to unknown structure {sb.structure!r}")

    if cfg.players < 2:
        raise ConfigError(f"need at least 2 players, got {cfg.players}")
    if cfg.turn_cap < 1:
        raise ConfigError(f"turn cap must be positive, got {cfg.turn_cap}")

    for action, secs in cfg.time_per_action.items():
        if secs < 0:
            raise ConfigError(f"negative duration {secs} for action {action!r}")

    for kind in SPECIAL_CARDS:
        start = cfg.start_cards.get(kind, 0)
        cap = cfg.max_cards.get(kind, 0)
        if cap < 0:
            raise ConfigError(f"negative maximum for {kind} cards")
        if not 0 <= start <= cap:
            raise ConfigError(f"starting {kind} cards {start} outside [0, {cap}]")

    if cfg.trade_nope_label not in (NOPE_STEAL, NOPE_TRADE):
        raise ConfigError(f"unknown trade nope label {cfg.trade_nope_label!r}")

    if cfg.games < 0:
        raise ConfigError(f"games must be >= 0, got {cfg.games}")
    if cfg.workers < 1:
        raise ConfigError(f"workers must be >= 1, got {cfg.workers}")
    return cfg


def build_config_from_cli(argv: Optional[Sequence[str]] = None):
    ap = argparse.ArgumentParser(description="Estimate game length and action frequencies by simulation.")
    ap.add_argument("--games", type=int, default=1000)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--players", type=int, default=PLAYERS)
    ap.add_argument("--turn_cap", type=int, default=TURN_CAP)
    ap.add_argument("--workers", type=int, default=1, help="Worker processes (1 = run in-process)")
    ap.add_argument("--progress_every", type=int, default=100)
    ap.add_argument("--out_dir", default="summaries")
    ap.add_argument("--structures", default=None, help="CSV with name,<resource>... columns")
    ap.add_argument("--setbacks", default=None, help="CSV with structure,name columns")
    ap.add_argument("--trade_nope_label", choices=(NOPE_STEAL, NOPE_TRADE), default=NOPE_STEAL)
    ap.add_argument("--write_logs", action="store_true", help="Write per-game JSONL event logs")
    ap.add_argument("--debug", action="store_true", help="Print per-turn summaries")

    args = ap.parse_args(argv)

    cfg = Config(
        seed=args.seed,
        games=args.games,
        players=args.players,
        turn_cap=args.turn_cap,
        workers=args.workers,
        progress_every=args.progress_every,
        out_dir=args.out_dir,
        trade_nope_label=args.trade_nope_label,
        write_logs=args.write_logs,
        debug=args.debug,
    )

    # catalogs from CSV override the reference rule set
    if args.structures or args.setbacks:
        from devdeck.io.load_rules import load_structures, load_setbacks
        if args.structures:
            cfg.structures = load_structures(args.structures, cfg.resources)
        if args.setbacks:
            cfg.setbacks = load_setbacks(args.setbacks)

    validate_config(cfg)
    return cfg, args
