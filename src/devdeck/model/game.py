# src/devdeck/model/game.py
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
from devdeck.config import Config
from devdeck.model.card import Card, Structure
from devdeck.model.player import PlayerState
from devdeck.utils.logging import EventLog


class Outcome(str, Enum):
    WON = "won"
    NON_CONVERGENT = "non_convergent"


@dataclass
class GameState:
    """
    Owning context for one game. Every resolver takes it as first
    argument and mutates only what hangs off it.
    """
    cfg: Config
    rng: Any

    players: List[PlayerState] = field(default_factory=list)
    deck: List[Card] = field(default_factory=list)      # top of stack = end of list
    discard: List[Card] = field(default_factory=list)
    turn: int = 0

    # Run-level counters
    trades: int = 0
    steals: int = 0
    nopes: int = 0
    setbacks: int = 0
    total_time: int = 0   # simulated seconds

    winner: Optional[int] = None

    # Logging
    log: EventLog = field(default_factory=EventLog)

    # Convenience logger
    def emit(self, rec: Dict[str, Any]) -> None:
        self.log.emit(rec)

    @property
    def structures(self) -> List[Structure]:
        return self.cfg.structures

    def others(self, player: PlayerState) -> Iterator[PlayerState]:
        """Every other player, in seat order."""
        for p in self.players:
            if p is not player:
                yield p

    def cards_in_circulation(self) -> int:
        """Deck + discard + resource units held by players."""
        return (len(self.deck) + len(self.discard)
                + sum(p.total_resources() for p in self.players))


@dataclass(frozen=True)
class GameRecord:
    turns: int
    seconds: int
    trades: int
    steals: int
    nopes: int
    setbacks: int
    outcome: Outcome = Outcome.WON
    winner: Optional[int] = None
    seed: Optional[int] = None
    game: Optional[int] = None

    @property
    def won(self) -> bool:
        return self.outcome == Outcome.WON

    def to_row(self) -> Dict[str, Any]:
        row = asdict(self)
        row["outcome"] = self.outcome.value
        return row

    @staticmethod
    def from_game(g: GameState, outcome: Outcome, game: Optional[int] = None) -> "GameRecord":
        return GameRecord(
            turns=g.turn,
            seconds=g.total_time,
            trades=g.trades,
            steals=g.steals,
            nopes=g.nopes,
            setbacks=g.setbacks,
            outcome=outcome,
            winner=g.winner,
            seed=g.cfg.seed,
            game=game,
        )
