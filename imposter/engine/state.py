"""Mutable game record and the read-only views derived from it."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidAction
from .phases import GamePhase, Outcome, PhaseState, RevealStep

# Phases in which a round is in progress and the round invariants hold
ROUND_PHASES = (
    GamePhase.REVEAL,
    GamePhase.DISCUSSION,
    GamePhase.VOTING,
    GamePhase.RESULTS,
    GamePhase.END,
)


@dataclass(frozen=True)
class VoteTally:
    """Result of counting one voting cycle."""
    counts: dict[str, int]
    top: tuple[str, ...]  # Names sharing the highest count, first-seen order

    @property
    def is_tie(self) -> bool:
        return len(self.top) > 1

    @property
    def eliminated(self) -> Optional[str]:
        """The eliminated name, or None when the vote was tied."""
        return None if self.is_tie else self.top[0]


@dataclass(frozen=True)
class RoleCard:
    """What the player holding the device sees on the role screen."""
    player: str
    category: str
    is_imposter: bool
    word: Optional[str]  # None for the imposter

    @property
    def headline(self) -> str:
        if self.is_imposter:
            return "🕵️ YOU ARE THE IMPOSTER"
        return "✅ YOU ARE NOT THE IMPOSTER"


@dataclass
class GameState:
    """The complete state of a session.

    A single instance is owned by whoever drives the game and passed to the
    engine on every action.
    """
    players: list[str] = field(default_factory=list)
    alive: list[str] = field(default_factory=list)
    eliminated: list[str] = field(default_factory=list)
    round: int = 1
    cycle: int = 1
    category: Optional[str] = None
    word: Optional[str] = None
    imposter: Optional[str] = None
    reveal_index: int = 0
    votes: dict[str, str] = field(default_factory=dict)
    phase: GamePhase = GamePhase.SETUP
    reveal_step: RevealStep = RevealStep.AWAITING
    outcome: Optional[Outcome] = None
    last_tally: Optional[VoteTally] = None

    @property
    def phase_state(self) -> PhaseState:
        return PhaseState(
            phase=self.phase,
            round_number=self.round,
            cycle=self.cycle,
            reveal_step=self.reveal_step if self.phase == GamePhase.REVEAL else None,
        )

    @property
    def in_round(self) -> bool:
        return self.phase in ROUND_PHASES

    @property
    def current_revealer(self) -> Optional[str]:
        """Player whose turn it is to see their role."""
        if self.phase != GamePhase.REVEAL or self.reveal_index >= len(self.alive):
            return None
        return self.alive[self.reveal_index]

    @property
    def current_voter(self) -> Optional[str]:
        """First living player who has not voted this cycle."""
        if self.phase != GamePhase.VOTING:
            return None
        return next((p for p in self.alive if p not in self.votes), None)

    def candidates(self, voter: str) -> list[str]:
        """Players the given voter may vote for."""
        return [p for p in self.alive if p != voter]

    def role_card(self) -> RoleCard:
        """Role screen for the current revealer.

        Only available while the role is being shown.
        """
        if self.phase != GamePhase.REVEAL or self.reveal_step != RevealStep.SHOWING:
            raise InvalidAction("role-card", "no role is being shown")
        player = self.alive[self.reveal_index]
        is_imposter = player == self.imposter
        return RoleCard(
            player=player,
            category=self.category,
            is_imposter=is_imposter,
            word=None if is_imposter else self.word,
        )

    def check_invariants(self) -> None:
        """Raise InvalidAction if the round record is inconsistent."""
        if not self.in_round:
            return

        if self.imposter not in self.players:
            raise InvalidAction("invariant", f"imposter {self.imposter!r} is not a player")

        if len(set(self.players)) != len(self.players):
            raise InvalidAction("invariant", "duplicate player names")

        alive, gone = set(self.alive), set(self.eliminated)
        if alive & gone:
            raise InvalidAction("invariant", f"players both alive and eliminated: {sorted(alive & gone)}")
        if alive | gone != set(self.players) or len(self.alive) + len(self.eliminated) != len(self.players):
            raise InvalidAction("invariant", "alive and eliminated do not partition the players")

        if self.phase == GamePhase.REVEAL and not 0 <= self.reveal_index <= len(self.alive):
            raise InvalidAction("invariant", f"reveal index {self.reveal_index} out of range")

        # Votes refer to the living only while the cycle is open
        if self.phase not in (GamePhase.VOTING, GamePhase.RESULTS):
            return
        for voter, target in self.votes.items():
            if voter not in alive or target not in alive or voter == target:
                raise InvalidAction("invariant", f"illegal vote {voter} -> {target}")


def tally_votes(votes: dict[str, str]) -> VoteTally:
    """Count votes per target and find the names sharing the top count."""
    if not votes:
        raise InvalidAction("tally", "no votes recorded")

    # Counter keeps first-seen order
    counts = Counter(votes.values())
    top_count = max(counts.values())
    top = tuple(name for name, count in counts.items() if count == top_count)
    return VoteTally(counts=dict(counts), top=top)
