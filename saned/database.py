"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for user profiles and match records.
"""

import uuid
from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    create_engine,
    event,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from .roles import ROLE_VALUES, UserRole

Base = declarative_base()

PREFERENCE_PENDING = "pending"
PREFERENCE_LIKE = "like"
PREFERENCE_DISLIKE = "dislike"
PREFERENCES = (PREFERENCE_PENDING, PREFERENCE_LIKE, PREFERENCE_DISLIKE)


def new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    """User profile. Owned by the user directory, read by matching."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    email = Column(String, nullable=False, unique=True)
    role = Column(
        Enum(*ROLE_VALUES, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.INDIVIDUAL.value,
    )
    organization = Column(String, nullable=True)
    location = Column(String, nullable=True)
    tags = Column(JSON, nullable=True)
    interests = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role} email={self.email}>"


class Match(Base):
    """One scored pairing of a subject user with a candidate user."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("user_id", "target_user_id", name="uq_matches_user_target"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    match_score = Column(Float, nullable=False)
    shared_tags = Column(JSON, nullable=False, default=list)
    highlight = Column(String, nullable=False)
    preference = Column(
        Enum(*PREFERENCES, name="match_preference", native_enum=False),
        nullable=False,
        default=PREFERENCE_PENDING,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    user = relationship(User, foreign_keys=[user_id])
    target_user = relationship(User, foreign_keys=[target_user_id])

    def __repr__(self) -> str:
        return (
            f"<Match id={self.id} user_id={self.user_id} target_user_id={self.target_user_id} "
            f"score={self.match_score} preference={self.preference}>"
        )


def _sqlite_engine(db_path: Path):
    engine = create_engine(f"sqlite:///{db_path}")

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = _sqlite_engine(db_path)
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = _sqlite_engine(db_path)
    Session = sessionmaker(bind=engine)
    return Session()
