# src/devdeck/errors.py


class DevDeckError(Exception):
    """Base class for simulator errors."""


class ConfigError(DevDeckError):
    """Raised before any game starts when the rule set is unusable."""


class DeckExhausted(DevDeckError):
    """
    A draw was requested with both the deck and the discard pile empty.
    The card economy cannot sustain the rules; fatal for the current game.
    """

    def __init__(self, turn: int = 0, player: str = ""):
        self.turn = turn
        self.player = player
        super().__init__(
            f"No cards left to draw on turn {turn} ({player or 'unknown player'}): "
            "both the deck and the discard pile are empty."
        )
