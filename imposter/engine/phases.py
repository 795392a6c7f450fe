"""Game phase definitions and outcomes."""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class GamePhase(Enum):
    """Phases of a round."""
    SETUP = auto()       # Adding players
    REVEAL = auto()      # Device passed around, each player sees their role
    DISCUSSION = auto()  # Players give clues
    VOTING = auto()      # One voter at a time
    RESULTS = auto()     # Tally is resolved
    END = auto()         # Round is over


class RevealStep(Enum):
    """Sub-phase of the reveal for the player holding the device."""
    AWAITING = auto()  # Name and category shown, role hidden
    SHOWING = auto()   # Role (and word, unless imposter) shown


class Outcome(Enum):
    """How a round ended."""
    GROUP_WINS = "group"
    IMPOSTER_WINS = "imposter"

    @property
    def message(self) -> str:
        if self is Outcome.GROUP_WINS:
            return "🎯 GROUP WINS! Imposter eliminated."
        return "🕵️ IMPOSTER WINS! Final 2."


@dataclass
class PhaseState:
    """Snapshot of where a round is, used for display and log headings."""
    phase: GamePhase
    round_number: int = 1
    cycle: int = 1
    reveal_step: Optional[RevealStep] = None

    @property
    def phase_name(self) -> str:
        """Get a human-readable phase name with round and cycle number."""
        if self.phase == GamePhase.REVEAL:
            return f"round_{self.round_number}_reveal"
        elif self.phase == GamePhase.DISCUSSION:
            return f"round_{self.round_number}_cycle_{self.cycle}_discussion"
        elif self.phase == GamePhase.VOTING:
            return f"round_{self.round_number}_cycle_{self.cycle}_vote"
        elif self.phase == GamePhase.RESULTS:
            return f"round_{self.round_number}_cycle_{self.cycle}_results"
        return self.phase.name.lower()
