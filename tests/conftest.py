"""Shared fixtures for the round engine tests."""

import pytest

from imposter.engine import GameConfig, GamePhase, GameState, RoundEngine


def fixed_chooser(*preferred):
    """Chooser that picks a preferred item when offered one, else the first.

    Items are matched by value or, for categories, by name.
    """
    wanted = set(preferred)

    def choose(seq):
        items = list(seq)
        for item in items:
            if getattr(item, "name", item) in wanted:
                return item
        return items[0]

    return choose


def make_engine(*preferred, logger=None, **config):
    return RoundEngine(
        config=GameConfig(**config),
        choose=fixed_chooser(*preferred),
        logger=logger,
    )


def seat(engine, state, players):
    for name in players:
        engine.add_player(state, name)


def play_reveal(engine, state):
    """Pass the device around until discussion starts. Returns who saw what."""
    seen = []
    while state.phase == GamePhase.REVEAL:
        seen.append(state.current_revealer)
        engine.reveal(state)
        seen[-1] = (seen[-1], state.role_card())
        engine.hide_and_pass(state)
    return seen


def play_votes(engine, state, votes):
    """Run one discussion + voting cycle with the given votes."""
    engine.proceed_to_vote(state)
    for voter, target in votes.items():
        engine.cast_vote(state, voter, target)
    return state


def started_round(players, imposter, **kwargs):
    """Engine and state for a round that has reached discussion."""
    engine = make_engine(imposter, **kwargs)
    state = GameState()
    seat(engine, state, players)
    engine.start_round(state)
    play_reveal(engine, state)
    return engine, state


@pytest.fixture
def engine():
    return make_engine()


@pytest.fixture
def state():
    return GameState()
