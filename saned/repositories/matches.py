"""
Matches Repository.

Responsibilities:
- Read match records by (user_id, target_user_id) pair.
- Insert-or-ignore on the pair so concurrent writers never create duplicates.
- Transaction-safe writes.

Non-Responsibilities:
- No scoring.
- No default values for synthesized matches.

Invariant:
At most one row exists per (user_id, target_user_id). The unique
constraint on the table is the source of truth, not a prior read.
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from ..database import Match, PREFERENCE_PENDING, new_id

_INSERT_BY_DIALECT = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class MatchRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_pair(self, user_id: str, target_user_id: str) -> Optional[Match]:
        return (
            self.session.query(Match)
            .filter_by(user_id=user_id, target_user_id=target_user_id)
            .first()
        )

    def insert_if_absent(
        self,
        user_id: str,
        target_user_id: str,
        match_score: float,
        shared_tags: List[str],
        highlight: str,
        preference: str = PREFERENCE_PENDING,
    ) -> Tuple[Match, bool]:
        """
        Insert a match unless one already exists for the pair.

        Returns:
            Tuple of (row that owns the pair, whether this call inserted it)

        Raises:
            NotImplementedError: If the bound database has no ON CONFLICT support
        """
        dialect = self.session.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT.get(dialect)
        if insert is None:
            raise NotImplementedError(f"insert-or-ignore not supported for dialect: {dialect}")

        stmt = (
            insert(Match.__table__)
            .values(
                id=new_id(),
                user_id=user_id,
                target_user_id=target_user_id,
                match_score=float(match_score),
                shared_tags=list(shared_tags),
                highlight=highlight,
                preference=preference,
                created_at=datetime.now(),
            )
            .on_conflict_do_nothing(index_elements=["user_id", "target_user_id"])
        )
        result = self.session.execute(stmt)
        self.session.commit()
        return self.find_pair(user_id, target_user_id), result.rowcount == 1

    def save(self, match: Match) -> Match:
        self.session.add(match)
        self.session.commit()
        return match

    def history_for(self, user_id: str) -> List[Match]:
        """All matches for a subject, candidate user loaded, newest first."""
        return (
            self.session.query(Match)
            .options(joinedload(Match.target_user))
            .filter(Match.user_id == user_id)
            .order_by(Match.created_at.desc())
            .all()
        )
