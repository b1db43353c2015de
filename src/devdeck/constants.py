# src/devdeck/constants.py
# Reference rule set. Config copies these so a run can override any of them.

# Resource types in catalog order (deduction walks this order)
RES = ("variable", "class", "function", "array")

# name -> cost, in catalog order (closest-structure ties and builds follow this order)
STRUCTURES = {
    "Sprite":        {"array": 2, "variable": 1},
    "Collision":     {"class": 2, "function": 1},
    "State Machine": {"function": 2, "class": 1},
    "Timer":         {"variable": 2, "array": 1},
}

# resource type -> number of cards in the deck
RESOURCE_DECK = {r: 8 for r in RES}

# (structure, label)
SETBACKS = (
    ("State Machine", "Bug: Even the debugger is confused."),
    ("Sprite", "Alpha Male: Opacity so low, it's invisible."),
    ("Timer", "Procrastination: Your timer hit snooze."),
    ("Collision", "Self-Collision: Let's just call it friendly fire."),
)

# seconds per action
TIME_PER_ACTION = {
    "draw": 5,
    "build": 5,
    "setback": 10,
    "trade": 20,
    "steal": 10,
    "nope": 5,
}

SPECIAL_CARDS = ("trade", "steal", "nope")
START_CARDS = {"trade": 2, "steal": 1, "nope": 1}
MAX_CARDS = {"trade": 2, "steal": 1, "nope": 1}

TURN_CAP = 100
PLAYERS = 4

# Nope-check modes. Anything that is not "setback" scans the other players.
NOPE_SETBACK = "setback"
NOPE_STEAL = "steal"
NOPE_TRADE = "trade"
