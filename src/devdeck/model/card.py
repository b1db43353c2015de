# src/devdeck/model/card.py
from dataclasses import dataclass, field
from typing import Dict, Optional

RESOURCE = "resource"
SETBACK = "setback"


@dataclass(frozen=True)
class Setback:
    structure: str   # structure the setback threatens
    name: str        # narrative label


@dataclass(frozen=True)
class Structure:
    name: str
    cost: Dict[str, int] = field(default_factory=dict, hash=False, compare=True)

    @property
    def total_cost(self) -> int:
        return sum(self.cost.values())


@dataclass(frozen=True)
class Card:
    """
    A single deck card. Resource cards carry a resource type, setback
    cards carry the Setback they trigger.
    """
    kind: str
    resource: Optional[str] = None
    setback: Optional[Setback] = None

    @staticmethod
    def of_resource(resource: str) -> "Card":
        return Card(kind=RESOURCE, resource=resource)

    @staticmethod
    def of_setback(setback: Setback) -> "Card":
        return Card(kind=SETBACK, setback=setback)

    @property
    def is_resource(self) -> bool:
        return self.kind == RESOURCE

    @property
    def is_setback(self) -> bool:
        return self.kind == SETBACK

    @property
    def label(self) -> str:
        if self.is_setback and self.setback is not None:
            return self.setback.name
        return self.resource or ""
