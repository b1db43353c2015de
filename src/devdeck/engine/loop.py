# src/devdeck/engine/loop.py
from __future__ import annotations
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field, replace as dc_replace
from typing import Any, Dict, List, Optional, Tuple
import random
import time

from devdeck.config import Config, validate_config
from devdeck.errors import DeckExhausted
from devdeck.engine.setup import setup
from devdeck.engine.rounds import play_round
from devdeck.io.summaries import (
    format_report, summarize, write_event_logs, write_records,
)
from devdeck.model.game import GameRecord, GameState, Outcome
from devdeck.utils.logging import format_events


def simulate_game(cfg: Config, rng: Optional[random.Random] = None,
                  game: Optional[int] = None) -> Tuple[GameRecord, GameState]:
    """
    Play one game to a win or to the turn cap. Hitting the cap is a
    NON_CONVERGENT record, not an error. DeckExhausted propagates.
    """
    g = setup(cfg, rng)
    outcome = Outcome.WON

    while g.winner is None:
        if g.turn >= cfg.turn_cap:
            outcome = Outcome.NON_CONVERGENT
            g.emit({"a": "non_convergent", "t": g.turn})
            break
        start = len(g.log.records)
        play_round(g)
        if cfg.debug:
            print(format_events(g.log.records[start:]))
            print()

    if outcome == Outcome.WON:
        g.emit({"a": "game_end", "t": g.turn, "winner": g.winner, "secs_total": g.total_time,
                "trades": g.trades, "steals": g.steals, "nopes": g.nopes, "setbacks": g.setbacks})
    return GameRecord.from_game(g, outcome, game=game), g


def play_one(cfg: Config, game: Optional[int] = None) -> Dict[str, Any]:
    """
    Run one game and package the result for the batch runner. Kept at
    module level so worker processes can pickle it.
    """
    if cfg.debug:
        print(f"Simulation {(game or 0) + 1}")
    try:
        record, g = simulate_game(cfg, game=game)
    except DeckExhausted as e:
        return {"game": game, "seed": cfg.seed, "record": None,
                "error": str(e), "kind": type(e).__name__, "events": []}
    return {"game": game, "seed": cfg.seed, "record": record, "error": None,
            "events": g.log.records if cfg.write_logs else []}


@dataclass
class BatchResult:
    records: List[GameRecord] = field(default_factory=list)
    failures: List[Dict[str, Any]] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)
    report: str = ""
    paths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary, "failures": self.failures, "files": self.paths}


def _game_configs(cfg: Config, games: int) -> List[Config]:
    base_seed = int(cfg.seed or 0)
    return [dc_replace(cfg, seed=base_seed + i) for i in range(games)]


def run_many(cfg: Config, games: Optional[int] = None, persist: bool = True) -> BatchResult:
    validate_config(cfg)
    games = cfg.games if games is None else games
    print(f"[config] games={games} seed={cfg.seed} players={cfg.players} "
          f"turn_cap={cfg.turn_cap} workers={cfg.workers} trade_nope_label={cfg.trade_nope_label}")

    cfgs = _game_configs(cfg, games)
    t0 = time.time()

    def progress(done: int) -> None:
        if cfg.progress_every and done % cfg.progress_every == 0:
            print(f"[progress] finished {done}/{games} games | elapsed={time.time() - t0:.1f}s")

    if cfg.workers > 1 and games > 1:
        with ProcessPoolExecutor(max_workers=cfg.workers) as ex:
            futures = [ex.submit(play_one, c, i) for i, c in enumerate(cfgs)]
            for done, _ in enumerate(as_completed(futures), start=1):
                progress(done)
            # submission order, not completion order
            outs = [f.result() for f in futures]
    else:
        outs = []
        for i, c in enumerate(cfgs):
            outs.append(play_one(c, i))
            progress(i + 1)

    res = BatchResult()
    logs: Dict[int, List[Dict[str, Any]]] = {}
    for o in outs:
        if o["error"] is not None:
            res.failures.append({"game": o["game"], "seed": o["seed"],
                                 "kind": o["kind"], "reason": o["error"]})
            print(f"[failed] game {o['game']} (seed {o['seed']}): {o['error']}")
            continue
        res.records.append(o["record"])
        if o["events"]:
            logs[o["game"]] = o["events"]

    res.summary = summarize(res.records, res.failures)
    res.report = format_report(res.summary, cfg.time_per_action)

    if persist:
        json_path, csv_path = write_records(cfg.out_dir, cfg.seed, games, res.records)
        res.paths = [json_path, csv_path]
        print(f"[summaries] wrote {json_path} and {csv_path}")
        if logs:
            log_paths = write_event_logs(cfg.out_dir, cfg.seed, logs)
            print(f"[done] {len(log_paths)} event logs in {cfg.out_dir}/logs")

    print(res.report)
    return res
