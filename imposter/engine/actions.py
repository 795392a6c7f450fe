"""User actions fed into the round engine."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class Action(BaseModel):
    """Base class for all actions."""
    model_config = ConfigDict(frozen=True)

    name: ClassVar[str] = "action"


class AddPlayer(Action):
    """Add a player during setup."""
    name: ClassVar[str] = "add-player"
    player_name: str


class Reset(Action):
    """Clear the player list during setup."""
    name: ClassVar[str] = "reset"


class StartRound(Action):
    """Draw category, word and imposter and begin the reveal."""
    name: ClassVar[str] = "start-round"


class Reveal(Action):
    """Show the current player their role."""
    name: ClassVar[str] = "reveal"


class HideAndPass(Action):
    """Hide the role and pass the device on."""
    name: ClassVar[str] = "hide-and-pass"


class ProceedToVote(Action):
    """End the discussion and start voting."""
    name: ClassVar[str] = "proceed-to-vote"


class CastVote(Action):
    """Record one player's vote."""
    name: ClassVar[str] = "cast-vote"
    voter: str
    target: str


class NewRound(Action):
    """Play again with the same players."""
    name: ClassVar[str] = "new-round"


class FullReset(Action):
    """Discard the players and go back to setup."""
    name: ClassVar[str] = "full-reset"
