"""Game scoring engine.

Every public function takes the id of the authenticated user and only ever
reads or writes rows owned by that user. Each call is one unit of work: rows
are loaded, mutated and committed before the function returns, and a storage
failure rolls the session back and propagates unchanged.

Rule violations from ``update_score`` are not raised. They come back as a
``ScoreResult`` carrying a ``GameError`` so the HTTP layer can map the error
kind to a status code.
"""
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
import enum
import threading
import weakref
from typing import Optional

from flask import current_app

from scoreboard import db
from scoreboard.models import Game, GameType, MatchStatistics, isoformat, utcnow
from .scoring import Team, apply_change, is_valid_change, normalize_team, winner


class ErrorKind(str, enum.Enum):
    VALIDATION = 'validation'
    STATE = 'state'


class GameError(enum.Enum):
    NO_ACTIVE_GAME = (ErrorKind.STATE, 'No active game found. Start a new game first.')
    GAME_ALREADY_COMPLETE = (ErrorKind.STATE, 'Game is already complete. Start a new game first.')
    INVALID_TEAM = (ErrorKind.VALIDATION, "Invalid team name. Must be 'Home' or 'Away'")
    INVALID_SCORE_CHANGE = (ErrorKind.VALIDATION, 'Score change must be +1 or -1')

    def __init__(self, kind, message):
        self.kind = kind
        self.message = message

    @property
    def code(self) -> str:
        return self.name.lower()


@dataclass
class GameState:
    id: str
    game_type: GameType
    home_score: int
    away_score: int
    home_wins: int
    away_wins: int
    is_game_complete: bool
    created_at: datetime
    completed_at: Optional[datetime] = None

    def to_dict(self):
        payload = {
            'id': self.id,
            'gameType': self.game_type.name,
            'homeScore': self.home_score,
            'awayScore': self.away_score,
            'homeWins': self.home_wins,
            'awayWins': self.away_wins,
            'isGameComplete': self.is_game_complete,
            'createdAt': isoformat(self.created_at),
        }
        if self.completed_at is not None:
            payload['completedAt'] = isoformat(self.completed_at)
        return payload


@dataclass
class GameStatsResponse:
    total_games_played: int
    home_wins: int
    away_wins: int
    current_game: Optional[GameState] = None

    def to_dict(self):
        return {
            'totalGamesPlayed': self.total_games_played,
            'homeWins': self.home_wins,
            'awayWins': self.away_wins,
            'currentGame': self.current_game.to_dict() if self.current_game else None,
        }


@dataclass
class ScoreResult:
    state: Optional[GameState] = None
    error: Optional[GameError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# Serializes mutating calls per user within this process. Entries vanish once
# no call holds the lock.
_user_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
_user_locks_guard = threading.Lock()


@contextmanager
def _user_lock(user_id: str):
    with _user_locks_guard:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = threading.Lock()
            _user_locks[user_id] = lock
    with lock:
        yield


@contextmanager
def _unit_of_work():
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def _find_open_game(user_id: str) -> Optional[Game]:
    return (Game.query
            .filter_by(user_id=user_id, is_complete=False)
            .order_by(Game.created_at.desc())
            .first())


def _find_latest_game(user_id: str) -> Optional[Game]:
    return (Game.query
            .filter_by(user_id=user_id)
            .order_by(Game.created_at.desc())
            .first())


def _stats_row(user_id: str) -> Optional[MatchStatistics]:
    return MatchStatistics.query.filter_by(user_id=user_id).first()


def _win_counts(user_id: str):
    stats = _stats_row(user_id)
    if stats is None:
        return 0, 0
    return stats.home_wins, stats.away_wins


def _to_state(game: Game, home_wins: int, away_wins: int) -> GameState:
    return GameState(
        id=game.id,
        game_type=game.game_type,
        home_score=game.home_score,
        away_score=game.away_score,
        home_wins=home_wins,
        away_wins=away_wins,
        is_game_complete=game.is_complete,
        created_at=game.created_at,
        completed_at=game.completed_at,
    )


def _record_win(user_id: str, side: Team, when: datetime) -> None:
    stats = _stats_row(user_id)
    if stats is None:
        stats = MatchStatistics(user_id=user_id, home_wins=0, away_wins=0)
        db.session.add(stats)
    if side is Team.HOME:
        stats.home_wins += 1
    else:
        stats.away_wins += 1
    stats.last_updated = when


def get_current_game(user_id) -> Optional[GameState]:
    """Return the user's open game combined with their win tallies, or None."""
    user_id = str(user_id)
    game = _find_open_game(user_id)
    if game is None:
        return None
    home_wins, away_wins = _win_counts(user_id)
    return _to_state(game, home_wins, away_wins)


def start_new_game(user_id, game_type: GameType) -> GameState:
    """Close whatever game the user has open and start a fresh 0-0 game.

    The superseded game is marked complete without crediting either side.
    """
    user_id = str(user_id)
    with _user_lock(user_id), _unit_of_work():
        now = utcnow()
        existing = _find_open_game(user_id)
        if existing is not None:
            existing.complete(now)
            current_app.logger.info(
                f"[supersede] user={user_id} game={existing.id} "
                f"abandoned at {existing.home_score}-{existing.away_score}")

        home_wins, away_wins = _win_counts(user_id)

        game = Game(user_id=user_id, game_type=game_type,
                    home_score=0, away_score=0,
                    is_complete=False, created_at=now)
        db.session.add(game)
        db.session.flush()
        current_app.logger.info(f"[new_game] user={user_id} game={game.id} type={game_type.name}")
        state = _to_state(game, home_wins, away_wins)
    return state


def update_score(user_id, team, change) -> ScoreResult:
    user_id = str(user_id)
    with _user_lock(user_id), _unit_of_work():
        game = _find_open_game(user_id)
        if game is None:
            latest = _find_latest_game(user_id)
            error = GameError.GAME_ALREADY_COMPLETE if latest is not None else GameError.NO_ACTIVE_GAME
            return _rejected(user_id, error)

        side = normalize_team(team)
        if side is None:
            return _rejected(user_id, GameError.INVALID_TEAM)
        if not is_valid_change(change):
            return _rejected(user_id, GameError.INVALID_SCORE_CHANGE)

        if side is Team.HOME:
            game.home_score = apply_change(game.home_score, change)
        else:
            game.away_score = apply_change(game.away_score, change)

        won_by = winner(game.home_score, game.away_score)
        if won_by is not None:
            now = utcnow()
            game.complete(now)
            _record_win(user_id, won_by, now)
            current_app.logger.info(
                f"[game_won] user={user_id} game={game.id} winner={won_by.value} "
                f"final={game.home_score}-{game.away_score}")

        db.session.flush()
        home_wins, away_wins = _win_counts(user_id)
        current_app.logger.info(
            f"[score] user={user_id} game={game.id} home={game.home_score} "
            f"away={game.away_score} complete={game.is_complete}")
        state = _to_state(game, home_wins, away_wins)
    return ScoreResult(state=state)


def _rejected(user_id: str, error: GameError) -> ScoreResult:
    current_app.logger.warning(f"[score_rejected] user={user_id} reason={error.code}")
    return ScoreResult(error=error)


def get_stats(user_id) -> GameStatsResponse:
    user_id = str(user_id)
    home_wins, away_wins = _win_counts(user_id)
    return GameStatsResponse(
        total_games_played=home_wins + away_wins,
        home_wins=home_wins,
        away_wins=away_wins,
        current_game=get_current_game(user_id),
    )


def clear_stats(user_id) -> None:
    """Delete every game and the statistics row for the user. Not reversible."""
    user_id = str(user_id)
    with _user_lock(user_id), _unit_of_work():
        removed = Game.query.filter_by(user_id=user_id).delete(synchronize_session=False)
        MatchStatistics.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    current_app.logger.info(f"[clear_stats] user={user_id} games_removed={removed}")
