import enum
from typing import Optional

WINNING_SCORE = 11
MIN_LEAD_TO_WIN = 2


class Team(str, enum.Enum):
    HOME = 'home'
    AWAY = 'away'


def normalize_team(team) -> Optional[Team]:
    """Map a client supplied team name onto a Team, ignoring case."""
    if not isinstance(team, str):
        return None
    try:
        return Team(team.strip().lower())
    except ValueError:
        return None


def is_valid_change(change) -> bool:
    # bool is an int subclass; True must not pass as +1
    if isinstance(change, bool) or not isinstance(change, int):
        return False
    return change in (1, -1)


def apply_change(score: int, change: int) -> int:
    return max(0, score + change)


def winner(home: int, away: int,
           points_to: int = WINNING_SCORE,
           win_by: int = MIN_LEAD_TO_WIN) -> Optional[Team]:
    """Return the side that has won the game, or None while it is still open.

    A side wins once it has at least ``points_to`` points and leads by at
    least ``win_by``. Both sides can never satisfy this at the same time.
    """
    if home >= points_to and home - away >= win_by:
        return Team.HOME
    if away >= points_to and away - home >= win_by:
        return Team.AWAY
    return None
