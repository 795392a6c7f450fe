"""Main entry point for Find the Imposter."""

import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from .communication.markdown_logger import MarkdownLogger
from .engine.actions import (
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
from .engine.categories import CATEGORIES, build_categories, load_categories
from .engine.game import GameConfig, RoundEngine
from .engine.phases import GamePhase, Outcome, RevealStep
from .engine.state import GameState


# Load environment variables
load_dotenv()

console = Console()

DEFAULT_CONFIG_PATH = "config/game.yaml"

RULES = (
    "Add players (min {min_players}), then start.\n\n"
    "Rules:\n"
    "• 1 Imposter 🕵️\n"
    "• Everyone else sees the word\n"
    "• Vote players out\n"
    "• Tie = no elimination\n"
    "• Final 2 with imposter = imposter wins"
)


def load_config(config_path: Optional[str] = None) -> dict:
    """Load game configuration from YAML file.

    An explicitly given file must exist; a missing default file means defaults.
    """
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if not path.exists():
        if config_path:
            console.print(f"[red]Config file not found: {config_path}[/red]")
            sys.exit(1)
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def build_game_config(config_data: dict) -> GameConfig:
    """Create a GameConfig from loaded YAML data and the environment."""
    game_section = config_data.get("game") or {}
    categories_file = game_section.get("categories_file")
    if categories_file:
        categories = load_categories(categories_file)
    elif config_data.get("categories"):
        categories = build_categories(config_data["categories"])
    else:
        categories = CATEGORIES

    log_dir = game_section.get("log_dir", "games")
    log_dir = os.getenv("IMPOSTER_LOG_DIR", log_dir)

    return GameConfig(
        min_players=int(game_section.get("min_players", 2)),
        categories=categories,
        log_dir=log_dir or None,
    )


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold red]FIND THE IMPOSTER[/bold red]\n"
        "[dim]Pass the device, give clues, vote them out[/dim]",
        border_style="red",
    ))
    console.print()


def setup_screen(engine: RoundEngine, state: GameState) -> bool:
    """Collect players. Returns False when the user quits."""
    console.print(Panel(RULES.format(min_players=engine.config.min_players), border_style="cyan"))
    pills = "  ".join(f"👤 {escape(p)}" for p in state.players) or "None"
    console.print(f"[bold]Players:[/bold] {pills}\n")

    choices = ["add", "reset", "quit"]
    if "start-round" in engine.available_actions(state):
        choices.insert(1, "start")
    choice = Prompt.ask("Action", choices=choices, default="add")

    if choice == "add":
        name = Prompt.ask("Player name", default="")
        engine.advance(state, AddPlayer(player_name=name))
    elif choice == "start":
        engine.advance(state, StartRound())
    elif choice == "reset":
        engine.advance(state, Reset())
    else:
        return False
    console.clear()
    return True


def reveal_screen(engine: RoundEngine, state: GameState) -> None:
    """One step of passing the device around."""
    if state.reveal_step == RevealStep.AWAITING:
        player = state.current_revealer
        console.print(Panel(
            f"📱 PASS PHONE\n\n"
            f"Player: [bold cyan]{escape(player)}[/bold cyan] "
            f"({state.reveal_index + 1}/{len(state.alive)})\n"
            f"Category: {escape(state.category)}",
            border_style="yellow",
        ))
        console.input("[dim]Press Enter to 👀 reveal...[/dim]")
        engine.advance(state, Reveal())
        console.clear()
        return

    card = state.role_card()
    color = "red" if card.is_imposter else "green"
    console.print(Panel(
        f"[bold {color}]{card.headline}[/bold {color}]\n\n"
        f"Category: {escape(card.category)}\n"
        f"Secret Word: {escape(card.word or '???')}",
        border_style=color,
    ))
    console.input("[dim]Press Enter to 🙈 hide & pass...[/dim]")
    engine.advance(state, HideAndPass())
    console.clear()


def discussion_screen(engine: RoundEngine, state: GameState) -> None:
    """Show the clue round and wait for the group to start voting."""
    tally = state.last_tally
    if tally is not None:
        if tally.is_tie:
            console.print(f"[yellow]Tie between {escape(', '.join(tally.top))}. Nobody is eliminated.[/yellow]\n")
        else:
            console.print(f"[red]{escape(tally.eliminated)} was voted out.[/red]\n")

    console.print(Panel(
        f"💬 DISCUSSION\n\nGive 1-word clues.\nCycle {state.cycle}\n\n"
        f"Still in: {escape(', '.join(state.alive))}",
        border_style="magenta",
    ))
    console.input("[dim]Press Enter to 🗳️ vote...[/dim]")
    engine.advance(state, ProceedToVote())
    console.clear()


def voting_screen(engine: RoundEngine, state: GameState) -> None:
    """Take the current voter's vote."""
    voter = state.current_voter
    console.print(Panel(f"🗳️ VOTING\n\nVoter: [bold cyan]{escape(voter)}[/bold cyan]", border_style="blue"))
    target = Prompt.ask("Vote out", choices=state.candidates(voter))
    engine.advance(state, CastVote(voter=voter, target=target))
    console.clear()


def end_screen(engine: RoundEngine, state: GameState) -> bool:
    """Show the outcome. Returns False when the user quits."""
    color = "green" if state.outcome == Outcome.GROUP_WINS else "red"
    console.print(Panel(f"[bold {color}]{state.outcome.message}[/bold {color}]", border_style=color))

    table = Table(title=f"Round {state.round}", show_header=True, header_style="bold")
    table.add_column("Player", style="cyan")
    table.add_column("Role", style="magenta")
    table.add_column("Status", style="green")
    for player in state.players:
        role = "Imposter" if player == state.imposter else "Player"
        if player in state.eliminated:
            status = f"[red]Out #{state.eliminated.index(player) + 1}[/red]"
        else:
            status = "[green]Survived[/green]"
        table.add_row(escape(player), role, status)
    console.print(table)
    console.print(f"Secret Word: [bold]{escape(state.word)}[/bold]")
    console.print(f"Imposter: [bold]{escape(state.imposter)}[/bold]")
    console.print(f"Eliminated: {escape(', '.join(state.eliminated))}\n")

    if engine.logger and engine.logger.game_dir:
        console.print(f"[dim]Game log saved to: {escape(str(engine.logger.game_dir))}[/dim]\n")

    choice = Prompt.ask("Next", choices=["again", "reset", "quit"], default="again")
    if choice == "again":
        engine.advance(state, NewRound())
    elif choice == "reset":
        engine.advance(state, FullReset())
    else:
        return False
    console.clear()
    return True


def run_session(engine: RoundEngine, state: GameState) -> None:
    """Render the current phase and feed the user's action until they quit."""
    while True:
        if state.phase == GamePhase.SETUP:
            if not setup_screen(engine, state):
                return
        elif state.phase == GamePhase.REVEAL:
            reveal_screen(engine, state)
        elif state.phase == GamePhase.DISCUSSION:
            discussion_screen(engine, state)
        elif state.phase == GamePhase.VOTING:
            voting_screen(engine, state)
        elif state.phase == GamePhase.END:
            if not end_screen(engine, state):
                return
        else:
            # Results are resolved within the final vote
            break


def main():
    """Main entry point."""
    display_welcome()

    config_path = sys.argv[1] if len(sys.argv) > 1 else None
    config_data = load_config(config_path)
    game_config = build_game_config(config_data)

    logger = MarkdownLogger(base_dir=game_config.log_dir) if game_config.log_dir else None
    engine = RoundEngine(config=game_config, logger=logger)
    state = GameState()

    try:
        run_session(engine, state)
    except KeyboardInterrupt:
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"\n[red]Error during game: {e}[/red]")
        raise


def run():
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run()
