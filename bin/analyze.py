#!/usr/bin/env python3
"""Markdown report over a persisted batch (game_data_<seed>_<games>games.json|csv)."""
import argparse, os, sys, glob, re
import pandas as pd

from devdeck.io.summaries import format_time, load_records, turn_bucket

RUN_RE = re.compile(r"game_data_(?P<seed>\d+)_(?P<games>\d+)games\.(json|csv)$")


def df_to_md(df: pd.DataFrame) -> str:
    return df.to_markdown(index=False)

def find_runs(summaries_dir: str, run_hint: str|None = None, seed: str|None = None,
              games: str|None = None):
    """(path, seed, games) for every record file that passes the filters. JSON wins over CSV."""
    found = {}
    for ext in ("csv", "json"):
        for path in glob.glob(os.path.join(summaries_dir, f"game_data_*_*games.{ext}")):
            name = os.path.basename(path)
            m = RUN_RE.search(name)
            if m is None or (run_hint and run_hint not in name):
                continue
            if seed and m["seed"] != str(seed):
                continue
            if games and m["games"] != str(games):
                continue
            found[(m["seed"], m["games"])] = (path, m["seed"], m["games"])
    return list(found.values())

def pick_run_file(summaries_dir: str, run_hint: str|None, seed_filter: str|None,
                  games_filter: str|None, prefer_latest: bool):
    runs = find_runs(summaries_dir, run_hint, seed_filter, games_filter)
    if not runs:
        return None, None, None
    key = (lambda r: os.path.getmtime(r[0])) if prefer_latest else (lambda r: r[0])
    return max(runs, key=key)

def build_report(df: pd.DataFrame, seed=None, games=None, turn_cap=None) -> str:
    report = ["# Card Game Simulation – Analysis Report", ""]
    meta = []
    if games: meta.append(f"**Games simulated:** {games}")
    if seed:  meta.append(f"**Seed:** {seed}")
    if meta:
        report.append(" | ".join(meta))
        report.append("")

    # --- Outcomes ---
    report.append("## Outcomes\n")
    if "outcome" in df.columns and not df.empty:
        oc = df["outcome"].value_counts().rename_axis("outcome").reset_index(name="games")
        report.append(df_to_md(oc))
    else:
        report.append("_No records._")
    report.append("")

    won = df[df["outcome"] == "won"] if "outcome" in df.columns else df
    if won.empty:
        report.append("_No won games to summarize._")
        return "\n".join(report)

    # --- Won-game statistics ---
    cols = [c for c in ["turns", "seconds", "trades", "steals", "nopes", "setbacks"] if c in won.columns]
    desc = won[cols].describe().T.reset_index().rename(columns={"index": "metric"})
    report.append("## Won Games\n")
    report.append(df_to_md(desc.round(2)))
    report.append("")
    report.append(f"Average game time: {format_time(won['seconds'].mean())}  ")
    report.append(f"Longest game time: {format_time(won['seconds'].max())}")
    report.append("")

    # --- Turn buckets ---
    buckets = won["turns"].map(lambda t: turn_bucket(int(t), turn_cap))
    bc = buckets.value_counts().rename_axis("bucket").reset_index(name="games")
    bc["share"] = (bc["games"] / len(won)).round(3)
    report.append("## Turns to Win\n")
    report.append(df_to_md(bc))
    report.append("")

    # --- Winner seats ---
    if "winner" in won.columns:
        seats = won["winner"].value_counts().rename_axis("seat").reset_index(name="wins").sort_values("seat")
        seats["winrate"] = (seats["wins"] / len(won)).round(3)
        report.append("## Seat Summary\n")
        report.append(df_to_md(seats))
        report.append("")
    return "\n".join(report)

def main(argv=None):
    ap = argparse.ArgumentParser(description="Markdown report for a devdeck batch")
    ap.add_argument("--records", default=None, help="Record file to analyze; skips discovery")
    ap.add_argument("--summaries_dir", default="summaries")
    ap.add_argument("--run", default=None, help="Substring of the file name, e.g. 42_1000games")
    ap.add_argument("--seed", default=None)
    ap.add_argument("--games", default=None)
    ap.add_argument("--latest", action="store_true", help="Newest file wins instead of the last by name")
    ap.add_argument("--turn_cap", type=int, default=None)
    ap.add_argument("--out", default=None, help="Defaults to <summaries_dir>/analysis_report.md")
    args = ap.parse_args(argv)

    if args.records:
        path, seed, games = args.records, args.seed, args.games
    else:
        path, seed, games = pick_run_file(args.summaries_dir, args.run, args.seed,
                                          args.games, args.latest)
    if path is None:
        print(f"[analyze] no record files in {args.summaries_dir}")
        sys.exit(1)

    print(f"[analyze] reading {path}")
    report = build_report(load_records(path), seed, games, args.turn_cap)
    out = args.out or os.path.join(args.summaries_dir, "analysis_report.md")
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    with open(out, "w", encoding="utf-8") as fh:
        fh.write(report + "\n")
    print(f"[analyze] wrote {out}")

if __name__ == "__main__":
    main()
