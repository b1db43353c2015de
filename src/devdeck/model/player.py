# src/devdeck/model/player.py
from dataclasses import dataclass, field
from typing import Dict, List

from devdeck.constants import RES


@dataclass
class PlayerState:
    id: int
    name: str = ""

    # Resources held (type -> units)
    resources: Dict[str, int] = field(
        default_factory=lambda: {k: 0 for k in RES}
    )

    # Built structure names, in build order, no duplicates
    built: List[str] = field(default_factory=list)

    # Special-action cards
    trade_cards: int = 2
    steal_cards: int = 1
    nope_cards: int = 1

    skip_turn: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Player {self.id + 1}"

    def total_resources(self) -> int:
        return sum(self.resources.values())

    def owns(self, structure_name: str) -> bool:
        return structure_name in self.built

    def held(self, resource: str) -> int:
        return self.resources.get(resource, 0)
