from datetime import datetime, timezone
import enum
import uuid

from flask_login import UserMixin

from scoreboard import db, bcrypt


def utcnow():
    return datetime.now(timezone.utc)


def isoformat(value):
    if value is None:
        return None
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class GameType(enum.Enum):
    Singles = 0
    Doubles = 1

    @classmethod
    def parse(cls, value):
        """Accept an enum name (any case) or its integer ordinal."""
        if isinstance(value, bool):
            raise ValueError(f'Invalid game type: {value!r}')
        if isinstance(value, int):
            for member in cls:
                if member.value == value:
                    return member
        elif isinstance(value, str):
            for member in cls:
                if member.name.lower() == value.strip().lower():
                    return member
        raise ValueError(f'Invalid game type: {value!r}. Must be Singles or Doubles')


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(64), nullable=True)
    password_hash = db.Column(db.String(128), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'displayName': self.display_name,
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(64), nullable=False, index=True)
    game_type = db.Column(db.Enum(GameType), nullable=False, default=GameType.Singles)
    home_score = db.Column(db.Integer, nullable=False, default=0)
    away_score = db.Column(db.Integer, nullable=False, default=0)
    is_complete = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime(timezone=True), nullable=True)

    def complete(self, when=None):
        self.is_complete = True
        self.completed_at = when or utcnow()

    def __repr__(self):
        return f'<Game {self.id} user={self.user_id} {self.home_score}-{self.away_score}>'


class MatchStatistics(db.Model):
    __tablename__ = 'match_statistics'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    home_wins = db.Column(db.Integer, nullable=False, default=0)
    away_wins = db.Column(db.Integer, nullable=False, default=0)
    last_updated = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
