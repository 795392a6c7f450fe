"""Markdown logger for rounds, votes and outcomes."""

from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..engine.phases import Outcome
from ..engine.state import VoteTally


class MarkdownLogger:
    """Writes a session's rounds and votes to markdown files."""

    def __init__(self, base_dir: Union[str, Path] = "games"):
        """Initialize the logger.

        Args:
            base_dir: Base directory for session logs.
        """
        self.base_dir = Path(base_dir)
        self.game_dir: Optional[Path] = None
        self.game_id: Optional[str] = None

    def start_game(self, game_id: Optional[str] = None) -> Path:
        """Start logging a new session.

        Args:
            game_id: Optional session identifier. If not provided, uses timestamp.

        Returns:
            Path to the session directory.
        """
        if game_id is None:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H%M%S")
            game_id = f"game_{timestamp}"

        self.game_id = game_id
        self.game_dir = self.base_dir / game_id
        self.game_dir.mkdir(parents=True, exist_ok=True)

        self._write_game_header()

        return self.game_dir

    @property
    def game_file(self) -> Path:
        """The session summary file, starting the session on first use."""
        if self.game_dir is None:
            self.start_game()
        return self.game_dir / "game_state.md"

    def _write_game_header(self) -> None:
        with open(self.game_dir / "game_state.md", "w") as f:
            f.write(f"# Find the Imposter - {self.game_id}\n\n")
            f.write(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")
            f.write("---\n\n")

    def log_round_start(
        self,
        round_number: int,
        players: list[str],
        category: str,
        word: str,
        imposter: str,
    ) -> None:
        """Log the secret draw for a round.

        Args:
            round_number: Session round counter.
            players: Players in seating order.
            category: Drawn category label.
            word: Drawn secret word.
            imposter: Drawn imposter.
        """
        with open(self.game_file, "a") as f:
            f.write(f"## Round {round_number}\n\n")
            f.write(f"Category: {category}\n\n")
            f.write(f"Secret word (hidden): {word}\n\n")
            f.write("| Player | Role (Hidden) |\n")
            f.write("|--------|---------------|\n")
            for name in players:
                role = "Imposter" if name == imposter else "Player"
                f.write(f"| {name} | {role} |\n")
            f.write("\n")

    def log_phase_start(self, phase: str) -> None:
        """Log the start of a phase.

        Args:
            phase: Phase name (e.g., "round_1_cycle_2_discussion").
        """
        with open(self.game_file, "a") as f:
            f.write(f"### {phase.replace('_', ' ').title()}\n\n")

    def log_vote(
        self,
        round_number: int,
        cycle: int,
        votes: dict[str, str],
        tally: VoteTally,
    ) -> None:
        """Log one voting cycle to its own file.

        Args:
            round_number: Session round counter.
            cycle: Voting cycle within the round.
            votes: Mapping of voter to voted-for, in voting order.
            tally: Counted result.
        """
        votes_dir = self.game_file.parent / "votes"
        votes_dir.mkdir(exist_ok=True)

        filename = f"round_{round_number}_cycle_{cycle}.md"

        voters_by_target: dict[str, list[str]] = {name: [] for name in tally.counts}
        for voter, target in votes.items():
            voters_by_target[target].append(voter)

        with open(votes_dir / filename, "w") as f:
            f.write(f"# Voting - Round {round_number}, Cycle {cycle}\n\n")

            f.write("## Individual Votes\n\n")
            f.write("| Voter | Voted For |\n")
            f.write("|-------|----------|\n")
            for voter, target in votes.items():
                f.write(f"| {voter} | {target} |\n")

            f.write("\n## Vote Totals\n\n")
            for target, count in sorted(tally.counts.items(), key=lambda x: -x[1]):
                f.write(f"- **{target}**: {count} votes ({', '.join(voters_by_target[target])})\n")

            f.write("\n## Result\n\n")
            if tally.eliminated:
                f.write(f"**{tally.eliminated}** was eliminated.\n")
            else:
                f.write(f"*Tie between {', '.join(tally.top)} - no elimination.*\n")

        with open(self.game_file, "a") as f:
            if tally.eliminated:
                f.write(f"**{tally.eliminated}** was voted out ")
            else:
                f.write("*Vote tied - no elimination* ")
            f.write(f"(see [{filename}](./votes/{filename}))\n\n")

    def log_game_end(
        self,
        outcome: Outcome,
        word: str,
        imposter: str,
        eliminated: list[str],
        survivors: list[str],
    ) -> None:
        """Log the end of a round.

        Args:
            outcome: Which side won.
            word: The secret word.
            imposter: The imposter.
            eliminated: Players voted out, in order.
            survivors: Players still alive.
        """
        with open(self.game_file, "a") as f:
            f.write("---\n\n")
            f.write("## ROUND OVER\n\n")
            f.write(f"{outcome.message}\n\n")
            f.write(f"- Secret word: {word}\n")
            f.write(f"- Imposter: {imposter}\n")
            f.write(f"- Eliminated: {', '.join(eliminated) or 'nobody'}\n")
            f.write(f"- Survivors: {', '.join(survivors)}\n")
            f.write(f"\nEnded: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

    def log_reset(self) -> None:
        """Log that the player list was discarded."""
        with open(self.game_file, "a") as f:
            f.write("---\n\n*Players reset.*\n\n")
