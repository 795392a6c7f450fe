"""Round engine for Find the Imposter."""

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Mapping, Optional, Sequence, TypeVar

from .actions import (
    Action,
    AddPlayer,
    CastVote,
    FullReset,
    HideAndPass,
    NewRound,
    ProceedToVote,
    Reset,
    Reveal,
    StartRound,
)
from .categories import CATEGORIES, Category, get_category
from .errors import InvalidAction
from .phases import GamePhase, Outcome, RevealStep
from .state import GameState, tally_votes

if TYPE_CHECKING:
    from ..communication.markdown_logger import MarkdownLogger

T = TypeVar("T")
Chooser = Callable[[Sequence[T]], T]


@dataclass
class GameConfig:
    """Configuration for a game."""
    min_players: int = 2
    categories: Mapping[str, Category] = field(default_factory=lambda: CATEGORIES)
    log_dir: Optional[str] = "games"

    def __post_init__(self):
        if self.min_players < 2:
            raise ValueError(f"min_players must be at least 2, got {self.min_players}")


class RoundEngine:
    """Applies actions to a GameState.

    The engine holds no game data of its own. Every method takes the state,
    checks the action's precondition, mutates the state and returns it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        choose: Chooser = random.choice,
        logger: Optional["MarkdownLogger"] = None,
    ):
        """Initialize the engine.

        Args:
            config: Game configuration.
            choose: Picks one item uniformly from a sequence.
            logger: Optional markdown logger.
        """
        self.config = config or GameConfig()
        self.choose = choose
        self.logger = logger

    # --- Dispatch ---

    def advance(self, state: GameState, action: Action) -> GameState:
        """Apply a single action to the state."""
        if isinstance(action, AddPlayer):
            self.add_player(state, action.player_name)
        elif isinstance(action, Reset):
            self.reset(state)
        elif isinstance(action, StartRound):
            self.start_round(state)
        elif isinstance(action, Reveal):
            self.reveal(state)
        elif isinstance(action, HideAndPass):
            self.hide_and_pass(state)
        elif isinstance(action, ProceedToVote):
            self.proceed_to_vote(state)
        elif isinstance(action, CastVote):
            self.cast_vote(state, action.voter, action.target)
        elif isinstance(action, NewRound):
            self.new_round(state)
        elif isinstance(action, FullReset):
            self.full_reset(state)
        else:
            raise InvalidAction(action.name, f"unsupported action {type(action).__name__}")
        return state

    def available_actions(self, state: GameState) -> list[str]:
        """Names of the actions whose preconditions currently hold."""
        if state.phase == GamePhase.SETUP:
            actions = [AddPlayer.name, Reset.name]
            if len(state.players) >= self.config.min_players:
                actions.append(StartRound.name)
            return actions

        if state.phase == GamePhase.REVEAL:
            if state.reveal_step == RevealStep.AWAITING:
                actions = [Reveal.name]
            else:
                actions = [HideAndPass.name]
        elif state.phase == GamePhase.DISCUSSION:
            actions = [ProceedToVote.name]
        elif state.phase == GamePhase.VOTING:
            actions = [CastVote.name]
        elif state.phase == GamePhase.END:
            actions = [NewRound.name, FullReset.name]
        else:
            actions = []
        # Reset abandons whatever round is in progress
        return actions + [Reset.name]

    def _require_phase(self, state: GameState, action: str, *phases: GamePhase) -> None:
        if state.phase not in phases:
            allowed = ", ".join(p.name.lower() for p in phases)
            raise InvalidAction(action, f"not allowed in {state.phase.name.lower()} phase (needs {allowed})")

    # --- Setup ---

    def add_player(self, state: GameState, name: str) -> bool:
        """Add a player by name.

        Returns:
            True if the player was added, False for an empty or duplicate name.
        """
        self._require_phase(state, AddPlayer.name, GamePhase.SETUP)
        name = name.strip()
        if not name or name in state.players:
            return False
        state.players.append(name)
        return True

    def reset(self, state: GameState) -> GameState:
        """Clear the player list and the round counter from any phase."""
        self._clear_players(state)
        return state

    def _clear_players(self, state: GameState) -> None:
        # Round fields are left as they are; the round is simply abandoned
        state.players = []
        state.round = 1
        state.phase = GamePhase.SETUP
        if self.logger:
            self.logger.log_reset()

    # --- Round setup ---

    def start_round(self, state: GameState) -> GameState:
        """Draw category, word and imposter, then begin the reveal."""
        self._require_phase(state, StartRound.name, GamePhase.SETUP)
        self._require_players(state, StartRound.name)
        self._deal(state)
        return state

    def _require_players(self, state: GameState, action: str) -> None:
        if len(state.players) < self.config.min_players:
            raise InvalidAction(
                action,
                f"need at least {self.config.min_players} players, have {len(state.players)}",
            )

    def _deal(self, state: GameState) -> None:
        name = self.choose(list(self.config.categories))
        category = get_category(name, self.config.categories)
        state.category = category.name
        state.word = self.choose(category.words)
        state.imposter = self.choose(state.players)
        state.alive = list(state.players)
        state.eliminated = []
        state.cycle = 1
        state.votes = {}
        state.reveal_index = 0
        state.reveal_step = RevealStep.AWAITING
        state.outcome = None
        state.last_tally = None
        state.phase = GamePhase.REVEAL
        state.check_invariants()

        if self.logger:
            self.logger.log_round_start(
                state.round, state.players, state.category, state.word, state.imposter
            )
            self.logger.log_phase_start(state.phase_state.phase_name)

    # --- Reveal ---

    def reveal(self, state: GameState) -> GameState:
        """Show the current player their role."""
        self._require_phase(state, Reveal.name, GamePhase.REVEAL)
        if state.reveal_step != RevealStep.AWAITING:
            raise InvalidAction(Reveal.name, "role is already being shown")
        state.reveal_step = RevealStep.SHOWING
        return state

    def hide_and_pass(self, state: GameState) -> GameState:
        """Hide the role and hand the device to the next player."""
        self._require_phase(state, HideAndPass.name, GamePhase.REVEAL)
        if state.reveal_step != RevealStep.SHOWING:
            raise InvalidAction(HideAndPass.name, "no role is being shown")

        state.reveal_index += 1
        state.reveal_step = RevealStep.AWAITING
        if state.reveal_index >= len(state.alive):
            self._enter(state, GamePhase.DISCUSSION)
        return state

    # --- Discussion & voting ---

    def proceed_to_vote(self, state: GameState) -> GameState:
        """End the discussion and start voting."""
        self._require_phase(state, ProceedToVote.name, GamePhase.DISCUSSION)
        self._enter(state, GamePhase.VOTING)
        return state

    def cast_vote(self, state: GameState, voter: str, target: str) -> GameState:
        """Record a vote and resolve the cycle once everyone has voted."""
        self._require_phase(state, CastVote.name, GamePhase.VOTING)
        if voter not in state.alive:
            raise InvalidAction(CastVote.name, f"{voter!r} is not a living player")
        if target not in state.alive:
            raise InvalidAction(CastVote.name, f"{target!r} is not a living player")
        if target == voter:
            raise InvalidAction(CastVote.name, f"{voter!r} cannot vote for themselves")
        if voter in state.votes:
            raise InvalidAction(CastVote.name, f"{voter!r} has already voted")

        state.votes[voter] = target
        if all(p in state.votes for p in state.alive):
            self._enter(state, GamePhase.RESULTS)
            self._resolve(state)
        return state

    # --- Results ---

    def _resolve(self, state: GameState) -> None:
        tally = tally_votes(state.votes)
        state.last_tally = tally
        if self.logger:
            self.logger.log_vote(state.round, state.cycle, state.votes, tally)

        if tally.is_tie:
            self._next_cycle(state)
            return

        out = tally.eliminated
        state.alive.remove(out)
        state.eliminated.append(out)

        if out == state.imposter:
            self._finish(state, Outcome.GROUP_WINS)
        elif len(state.alive) == 2 and state.imposter in state.alive:
            self._finish(state, Outcome.IMPOSTER_WINS)
        else:
            self._next_cycle(state)

    def _next_cycle(self, state: GameState) -> None:
        state.votes = {}
        state.cycle += 1
        self._enter(state, GamePhase.DISCUSSION)

    def _finish(self, state: GameState, outcome: Outcome) -> None:
        state.outcome = outcome
        self._enter(state, GamePhase.END)
        if self.logger:
            self.logger.log_game_end(
                outcome, state.word, state.imposter, state.eliminated, state.alive
            )

    def _enter(self, state: GameState, phase: GamePhase) -> None:
        state.phase = phase
        state.check_invariants()
        if self.logger and phase != GamePhase.END:
            self.logger.log_phase_start(state.phase_state.phase_name)

    # --- End ---

    def new_round(self, state: GameState) -> GameState:
        """Deal a fresh round for the same players."""
        self._require_phase(state, NewRound.name, GamePhase.END)
        self._require_players(state, NewRound.name)
        state.round += 1
        self._deal(state)
        return state

    def full_reset(self, state: GameState) -> GameState:
        """Discard the players and return to setup."""
        self._require_phase(state, FullReset.name, GamePhase.END)
        self._clear_players(state)
        return state
