# src/devdeck/io/load_rules.py
from __future__ import annotations
import csv
from typing import Dict, Iterable, List, Sequence

from devdeck.constants import RES
from devdeck.errors import ConfigError
from devdeck.model.card import Setback, Structure


def _cost_cell(path: str, structure: str, column: str, value) -> int:
    """Blank cells mean 0; anything else must be a whole number."""
    text = "" if value is None else str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ConfigError(
            f"{path}: structure {structure!r} has non-integer {column!r} cost {text!r}"
        ) from None


def _read_csv(path: str) -> Iterable[Dict[str, str]]:
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.DictReader(f):
            # normalize keys
            yield {(k.strip() if k else k): (v.strip() if isinstance(v, str) else v)
                   for k, v in row.items()}


def _row_to_cost(path: str, name: str, row: Dict[str, str],
                 resources: Sequence[str]) -> Dict[str, int]:
    """
    Cost keeps the column order of the file, so the advisor's first-match
    scans follow the order the catalog was written in.
    """
    cost: Dict[str, int] = {}
    for k, v in row.items():
        if not k or k == "name":
            continue
        n = _cost_cell(path, name, k, v)
        if not n:
            continue
        if k not in resources:
            raise ConfigError(f"{path}: structure {name!r} costs unknown resource {k!r}")
        cost[k] = n
    return cost


def load_structures(path: str, resources: Sequence[str] = RES) -> List[Structure]:
    """
    Load the structure catalog from CSV.
    Expected columns: name,<resource>... (one column per resource type, blank = 0).
    Rows keep file order; that order is the catalog order.
    """
    out: List[Structure] = []
    for row in _read_csv(path):
        name = (row.get("name") or "").strip()
        if not name:
            continue
        out.append(Structure(name=name, cost=_row_to_cost(path, name, row, resources)))
    return out


def load_setbacks(path: str) -> List[Setback]:
    """
    Load the setback catalog from CSV.
    Expected columns: structure,name
    """
    out: List[Setback] = []
    for row in _read_csv(path):
        structure = (row.get("structure") or "").strip()
        if not structure:
            continue
        out.append(Setback(structure=structure, name=(row.get("name") or "").strip() or structure))
    return out
