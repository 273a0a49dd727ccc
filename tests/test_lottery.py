"""Tests for ticket accumulation and weighted winner selection."""

from collections import Counter

from core import DrawDefaults
from services.lottery import (
    EligibleParticipant,
    accumulate_tickets,
    generate_wheel_seed,
    select_weighted_winner,
)

ALICE = EligibleParticipant("u-alice", "Alice", 1)
BOB = EligibleParticipant("u-bob", "Bob", 3)


def test_accumulate_counts_everything_without_a_win():
    participations = [
        {"ticket_count": 1, "joined_at": "2024-01-01T10:00:00+00:00"},
        {"ticket_count": 1, "joined_at": "2024-02-01T10:00:00+00:00"},
    ]
    assert accumulate_tickets(participations, None) == 2


def test_accumulate_counts_only_after_last_win():
    participations = [
        {"ticket_count": 1, "joined_at": "2024-01-01T10:00:00+00:00"},
        {"ticket_count": 1, "joined_at": "2024-02-01T10:00:00+00:00"},
        {"ticket_count": 1, "joined_at": "2024-03-01T10:00:00+00:00"},
    ]
    assert accumulate_tickets(participations, "2024-02-01T10:00:00+00:00") == 1


def test_select_returns_none_without_tickets():
    assert select_weighted_winner([]) is None
    assert select_weighted_winner([EligibleParticipant("u", "U", 0)]) is None


def test_seeded_selection_maps_positions_to_ticket_ranges():
    modulus = DrawDefaults.SEED_MODULUS
    # total = 4 tickets; position 0 is Alice, positions 1..3 are Bob
    assert select_weighted_winner([ALICE, BOB], seed=0) is ALICE
    assert select_weighted_winner([ALICE, BOB], seed=modulus // 4 + 1) is BOB
    assert select_weighted_winner([ALICE, BOB], seed=modulus - 1) is BOB


def test_seeded_selection_is_deterministic():
    seed = 123_456
    assert select_weighted_winner([ALICE, BOB], seed) is select_weighted_winner([ALICE, BOB], seed)


def test_single_participant_always_wins():
    for _ in range(20):
        assert select_weighted_winner([BOB]) is BOB


def test_selection_favours_more_tickets():
    wins = Counter(select_weighted_winner([ALICE, BOB]).user_id for _ in range(2000))
    assert wins["u-bob"] > wins["u-alice"]


def test_wheel_seed_range():
    seeds = {generate_wheel_seed() for _ in range(50)}
    assert all(0 <= seed < DrawDefaults.SEED_RANGE for seed in seeds)
    assert len(seeds) > 1
