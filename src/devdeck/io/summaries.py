# src/devdeck/io/summaries.py
from __future__ import annotations
import json
import math
import os
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import pandas as pd

from devdeck.model.game import GameRecord, Outcome

RECORD_COLS = [
    "game", "seed", "outcome", "winner",
    "turns", "seconds", "trades", "steals", "nopes", "setbacks",
]
COUNT_COLS = ("trades", "steals", "nopes", "setbacks")


def format_time(seconds: float) -> str:
    """Whole hours and minutes, rounded down."""
    seconds = int(seconds or 0)
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    return f"{hours} hours and {minutes} minutes"


def records_frame(records: Iterable[GameRecord]) -> pd.DataFrame:
    rows = [r.to_row() for r in records]
    if not rows:
        return pd.DataFrame(columns=RECORD_COLS)
    df = pd.DataFrame(rows)
    for col in RECORD_COLS:
        if col not in df.columns:
            df[col] = None
    return df[RECORD_COLS]


def summarize(records: Sequence[GameRecord], failures: Sequence[Dict[str, Any]] = ()) -> Dict[str, Any]:
    """
    Averages and maxima over won games. Non-convergent games and failed
    runs are only tallied.
    """
    df = records_frame(records)
    won = df[df["outcome"] == Outcome.WON.value]

    out: Dict[str, Any] = {
        "games": len(df) + len(failures),
        "won": len(won),
        "non_convergent": int((df["outcome"] == Outcome.NON_CONVERGENT.value).sum()),
        "failed": len(failures),
        "avg_turns": None,
        "max_turns": None,
        "avg_seconds": None,
        "max_seconds": None,
    }
    for col in COUNT_COLS:
        out[f"avg_{col}"] = None
    if won.empty:
        return out

    out["avg_turns"] = float(won["turns"].mean())
    out["max_turns"] = int(won["turns"].max())
    out["avg_seconds"] = float(won["seconds"].mean())
    out["max_seconds"] = int(won["seconds"].max())
    for col in COUNT_COLS:
        out[f"avg_{col}"] = float(won[col].mean())
    return out


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_report(summary: Dict[str, Any], time_per_action: Dict[str, int]) -> str:
    tpa = time_per_action
    n = summary["won"]
    lines = [
        "--- Simulation Results ---",
        (f"Assuming {tpa.get('draw', 0)} seconds per draw, {tpa.get('build', 0)} seconds per build, "
         f"{tpa.get('setback', 0)} seconds per setback, {tpa.get('trade', 0)} seconds per trade, "
         f"{tpa.get('steal', 0)} seconds per steal, and {tpa.get('nope', 0)} seconds per nope:"),
    ]
    if summary["avg_turns"] is None:
        lines.append("No game produced a winner.")
    else:
        lines += [
            f"Average turns to win after {n} simulations: {_round_half_up(summary['avg_turns'])}",
            f"Highest turn game: {summary['max_turns']}",
            f"Average game time after {n} simulations: {format_time(summary['avg_seconds'])}",
            f"Longest game time: {format_time(summary['max_seconds'])}",
            (f"Per game: {summary['avg_trades']:.2f} trades, {summary['avg_steals']:.2f} steals, "
             f"{summary['avg_nopes']:.2f} nopes, {summary['avg_setbacks']:.2f} setbacks"),
        ]
    if summary["non_convergent"] or summary["failed"]:
        lines.append(
            f"Valid samples: {n}/{summary['games']} "
            f"(non-convergent: {summary['non_convergent']}, failed: {summary['failed']})"
        )
    return "\n".join(lines)


def write_records(out_dir: str, seed: int, games: int,
                  records: Sequence[GameRecord]) -> Tuple[str, str]:
    df = records_frame(records)
    os.makedirs(out_dir, exist_ok=True)
    json_path = os.path.join(out_dir, f"game_data_{seed}_{games}games.json")
    csv_path = os.path.join(out_dir, f"game_data_{seed}_{games}games.csv")
    df.to_json(json_path, orient="records")
    df.to_csv(csv_path, index=False)
    return json_path, csv_path


def write_event_logs(out_dir: str, seed: int,
                     logs: Dict[int, List[Dict[str, Any]]]) -> List[str]:
    """One JSONL file per game under <out_dir>/logs."""
    log_dir = os.path.join(out_dir, "logs")
    os.makedirs(log_dir, exist_ok=True)
    paths = []
    for i, events in sorted(logs.items()):
        path = os.path.join(log_dir, f"game_{seed}_{i}.jsonl")
        with open(path, "w", encoding="utf-8") as f:
            for e in events:
                f.write(json.dumps(e) + "\n")
        paths.append(path)
    return paths


def load_records(path: str) -> pd.DataFrame:
    if path.endswith(".json"):
        df = pd.read_json(path, orient="records")
    else:
        df = pd.read_csv(path)
    if df.empty:
        return pd.DataFrame(columns=RECORD_COLS)
    return df


def turn_bucket(t: int, cap: Optional[int] = None) -> str:
    if t <= 10: return "early"
    if t <= 20: return "mid"
    if cap is not None and t >= cap: return "capped"
    return "late"
