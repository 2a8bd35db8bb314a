"""
User Directory.

Responsibilities:
- Read user profiles by id.
- Load the full candidate pool for a subject.
- Insert new profiles.

Non-Responsibilities:
- No scoring.
- No profile validation (see saned.schema).

Invariant:
Repositories must not encode domain decisions.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..database import User


class UserDirectory:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.query(User).filter_by(email=email).first()

    def find_all_excluding(self, user_id: str) -> List[User]:
        """Every user except `user_id`, oldest profile first. Not paginated."""
        return (
            self.session.query(User)
            .filter(User.id != user_id)
            .order_by(User.created_at, User.id)
            .all()
        )

    def list_all(self) -> List[User]:
        return self.session.query(User).order_by(User.created_at, User.id).all()

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.commit()
        return user
