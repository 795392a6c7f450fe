"""Game engine - round state, phases, rules and reference data."""

from .categories import Category, CATEGORIES
from .errors import InvalidAction
from .game import GameConfig, RoundEngine
from .phases import GamePhase, Outcome, RevealStep
from .state import GameState, RoleCard, VoteTally, tally_votes

__all__ = [
    "Category",
    "CATEGORIES",
    "InvalidAction",
    "GameConfig",
    "RoundEngine",
    "GamePhase",
    "Outcome",
    "RevealStep",
    "GameState",
    "RoleCard",
    "VoteTally",
    "tally_votes",
]
