"""Tests for round setup, the reveal sequence and voting."""

import copy
import random

import pytest

from imposter.engine import (
    CATEGORIES,
    GamePhase,
    GameState,
    InvalidAction,
    RevealStep,
    RoundEngine,
)
from imposter.engine.actions import CastVote, HideAndPass, ProceedToVote, Reveal

from conftest import make_engine, play_reveal, seat, started_round


def test_start_round_initializes_state():
    engine = make_engine("C", "🍎 Fruits", "Mango")
    state = GameState()
    seat(engine, state, ["A", "B", "C", "D"])
    engine.start_round(state)

    assert state.category == "🍎 Fruits"
    assert state.word == "Mango"
    assert state.imposter == "C"
    assert state.alive == ["A", "B", "C", "D"]
    assert state.alive is not state.players
    assert state.eliminated == []
    assert state.cycle == 1
    assert state.votes == {}
    assert state.reveal_index == 0
    assert state.phase == GamePhase.REVEAL
    assert state.reveal_step == RevealStep.AWAITING


def test_imposter_is_always_one_of_the_players():
    rng = random.Random(1234)
    engine = RoundEngine(choose=rng.choice)
    players = ["Ann", "Ben", "Cat", "Dan", "Eve"]
    drawn = set()
    for _ in range(100):
        state = GameState()
        seat(engine, state, players)
        engine.start_round(state)
        assert state.imposter in state.players
        assert state.word in CATEGORIES[state.category].words
        drawn.add(state.imposter)
    assert drawn == set(players)


def test_reveal_visits_every_player_once_in_order():
    engine = make_engine("B")
    state = GameState()
    seat(engine, state, ["A", "B", "C", "D"])
    engine.start_round(state)

    seen = play_reveal(engine, state)
    assert [player for player, _ in seen] == ["A", "B", "C", "D"]
    assert state.phase == GamePhase.DISCUSSION
    assert state.reveal_index == len(state.alive)


def test_role_card_hides_word_from_imposter():
    engine = make_engine("B", "⚽ Sports", "Golf")
    state = GameState()
    seat(engine, state, ["A", "B"])
    engine.start_round(state)

    (a, a_card), (b, b_card) = play_reveal(engine, state)
    assert (a, b) == ("A", "B")
    assert not a_card.is_imposter
    assert a_card.word == "Golf"
    assert a_card.category == "⚽ Sports"
    assert b_card.is_imposter
    assert b_card.word is None
    assert "IMPOSTER" in b_card.headline


def test_role_card_not_available_while_awaiting(engine, state):
    seat(engine, state, ["A", "B"])
    engine.start_round(state)
    with pytest.raises(InvalidAction):
        state.role_card()


def test_reveal_steps_must_alternate(engine, state):
    seat(engine, state, ["A", "B"])
    engine.start_round(state)

    with pytest.raises(InvalidAction):
        engine.advance(state, HideAndPass())
    engine.advance(state, Reveal())
    assert state.reveal_step == RevealStep.SHOWING
    assert engine.available_actions(state) == ["hide-and-pass", "reset"]
    with pytest.raises(InvalidAction):
        engine.advance(state, Reveal())

    engine.advance(state, HideAndPass())
    assert state.reveal_step == RevealStep.AWAITING
    assert state.current_revealer == "B"


def test_discussion_proceeds_to_vote():
    engine, state = started_round(["A", "B", "C"], "A")
    assert state.phase == GamePhase.DISCUSSION
    assert engine.available_actions(state) == ["proceed-to-vote", "reset"]
    engine.advance(state, ProceedToVote())
    assert state.phase == GamePhase.VOTING
    assert state.current_voter == "A"


def test_voting_order_follows_alive_order():
    engine, state = started_round(["A", "B", "C", "D"], "D")
    engine.proceed_to_vote(state)

    engine.cast_vote(state, "A", "D")
    assert state.current_voter == "B"
    # Out-of-turn votes are recorded; the next voter is still the first without one
    engine.cast_vote(state, "C", "D")
    assert state.current_voter == "B"
    engine.cast_vote(state, "B", "C")
    assert state.current_voter == "D"
    assert state.candidates("D") == ["A", "B", "C"]


def test_self_vote_rejected():
    engine, state = started_round(["A", "B", "C"], "A")
    engine.proceed_to_vote(state)
    before = copy.deepcopy(state)
    with pytest.raises(InvalidAction):
        engine.advance(state, CastVote(voter="A", target="A"))
    assert state == before


@pytest.mark.parametrize(
    "voter,target",
    [
        ("Z", "A"),   # unknown voter
        ("A", "Z"),   # unknown target
    ],
)
def test_votes_must_involve_living_players(voter, target):
    engine, state = started_round(["A", "B", "C"], "A")
    engine.proceed_to_vote(state)
    with pytest.raises(InvalidAction):
        engine.cast_vote(state, voter, target)
    assert state.votes == {}


def test_eliminated_players_cannot_vote_or_be_voted_for():
    engine, state = started_round(["A", "B", "C", "D"], "A")
    engine.proceed_to_vote(state)
    for voter, target in {"A": "B", "B": "C", "C": "B", "D": "B"}.items():
        engine.cast_vote(state, voter, target)
    assert state.eliminated == ["B"]

    engine.proceed_to_vote(state)
    with pytest.raises(InvalidAction):
        engine.cast_vote(state, "B", "A")
    with pytest.raises(InvalidAction):
        engine.cast_vote(state, "A", "B")


def test_double_vote_rejected():
    engine, state = started_round(["A", "B", "C"], "A")
    engine.proceed_to_vote(state)
    engine.cast_vote(state, "A", "B")
    with pytest.raises(InvalidAction):
        engine.cast_vote(state, "A", "C")
    assert state.votes == {"A": "B"}


def test_vote_rejected_outside_voting():
    engine, state = started_round(["A", "B", "C"], "A")
    with pytest.raises(InvalidAction):
        engine.cast_vote(state, "A", "B")
    assert state.phase == GamePhase.DISCUSSION


def test_partition_holds_throughout_a_round():
    rng = random.Random(99)
    engine = RoundEngine(choose=rng.choice)
    state = GameState()
    seat(engine, state, ["A", "B", "C", "D", "E", "F"])
    engine.start_round(state)
    play_reveal(engine, state)

    while state.phase != GamePhase.END:
        engine.proceed_to_vote(state)
        while state.phase == GamePhase.VOTING:
            voter = state.current_voter
            engine.cast_vote(state, voter, rng.choice(state.candidates(voter)))
            assert not set(state.alive) & set(state.eliminated)
            assert set(state.alive) | set(state.eliminated) == set(state.players)
    assert state.outcome is not None
