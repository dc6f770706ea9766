import pytest

from scoreboard.services.games.scoring import (
    Team, apply_change, is_valid_change, normalize_team, winner,
)


@pytest.mark.parametrize('raw, expected', [
    ('home', Team.HOME),
    ('Home', Team.HOME),
    ('HOME', Team.HOME),
    (' away ', Team.AWAY),
    ('Away', Team.AWAY),
])
def test_normalize_team_ignores_case(raw, expected):
    assert normalize_team(raw) is expected


@pytest.mark.parametrize('raw', ['', 'visitor', 'homeaway', None, 1])
def test_normalize_team_rejects_unknown(raw):
    assert normalize_team(raw) is None


def test_is_valid_change():
    assert is_valid_change(1)
    assert is_valid_change(-1)
    for bad in (0, 2, -2, True, '1', 1.0, None):
        assert not is_valid_change(bad)


def test_apply_change_clamps_at_zero():
    assert apply_change(0, -1) == 0
    assert apply_change(0, 1) == 1
    assert apply_change(5, -1) == 4


@pytest.mark.parametrize('home, away, expected', [
    (11, 9, Team.HOME),
    (9, 11, Team.AWAY),
    (11, 10, None),
    (10, 11, None),
    (12, 10, Team.HOME),
    (15, 17, Team.AWAY),
    (10, 0, None),
    (11, 0, Team.HOME),
    (0, 0, None),
])
def test_winner(home, away, expected):
    assert winner(home, away) is expected


def test_winner_respects_custom_target():
    assert winner(15, 13, points_to=15) is Team.HOME
    assert winner(11, 9, points_to=15) is None
