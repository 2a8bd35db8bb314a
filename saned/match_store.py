"""
Match store: turns scoring output into durable match records.

Flow for a subject:
    load subject + candidate pool -> compute_matches -> insert-or-ignore per result

First-computed values are sticky. A pair that already has a row keeps its
score, highlight and preference; only set_preference changes a stored row.
"""

from typing import List, Optional

from .database import Match, PREFERENCE_DISLIKE, PREFERENCE_LIKE
from .errors import NotFoundError
from .logger import StructuredLogger, get_logger
from .repositories import MatchRepository, UserDirectory
from .scoring import compute_matches

SETTABLE_PREFERENCES = (PREFERENCE_LIKE, PREFERENCE_DISLIKE)

DEFAULT_MATCH_SCORE = 50
DEFAULT_HIGHLIGHT = "You showed interest in this profile"


class MatchStore:
    def __init__(
        self,
        users: UserDirectory,
        matches: MatchRepository,
        logger: Optional[StructuredLogger] = None,
    ):
        self.users = users
        self.matches = matches
        self.logger = logger or get_logger()

    def _require_user(self, user_id: str, kind: str = "User"):
        user = self.users.find_by_id(user_id)
        if user is None:
            self.logger.record_not_found()
            self.logger.warning(f"{kind} not found", user_id=user_id)
            raise NotFoundError(kind, user_id)
        return user

    def find_potential_matches(self, user_id: str) -> List[Match]:
        """
        Score every other user against `user_id` and persist the top results.

        Returns:
            Match rows in scoring order, a mix of pre-existing and new rows

        Raises:
            NotFoundError: If the subject does not exist
        """
        subject = self._require_user(user_id)
        candidates = self.users.find_all_excluding(user_id)
        results = compute_matches(subject, candidates)

        saved: List[Match] = []
        created = 0
        for result in results:
            match, inserted = self.matches.insert_if_absent(
                user_id=user_id,
                target_user_id=result.candidate.id,
                match_score=result.match_score,
                shared_tags=result.shared_tags,
                highlight=result.highlight,
            )
            if inserted:
                created += 1
            saved.append(match)

        self.logger.record_match_run(computed=len(results), created=created)
        self.logger.info(
            "Potential matches computed",
            user_id=user_id,
            pool_size=len(candidates),
            returned=len(saved),
            created=created,
        )
        return saved

    def set_preference(self, user_id: str, target_user_id: str, preference: str) -> Match:
        """
        Record a like or dislike for a candidate.

        A pair with no match yet gets a default row first; the scoring
        engine is not consulted for it.

        Raises:
            ValueError: If preference is not 'like' or 'dislike'
            NotFoundError: If no match exists and either user is missing
        """
        if preference not in SETTABLE_PREFERENCES:
            raise ValueError(
                f"Invalid preference '{preference}'. Expected one of: {', '.join(SETTABLE_PREFERENCES)}"
            )

        match = self.matches.find_pair(user_id, target_user_id)
        if match is None:
            self._require_user(user_id)
            self._require_user(target_user_id, kind="Target user")
            match, _ = self.matches.insert_if_absent(
                user_id=user_id,
                target_user_id=target_user_id,
                match_score=DEFAULT_MATCH_SCORE,
                shared_tags=[],
                highlight=DEFAULT_HIGHLIGHT,
            )

        match.preference = preference
        match = self.matches.save(match)

        self.logger.record_preference(preference)
        self.logger.info(
            "Match preference saved",
            user_id=user_id,
            target_user_id=target_user_id,
            preference=preference,
        )
        return match

    def get_match_history(self, user_id: str) -> List[Match]:
        """
        All matches recorded for a subject, newest first, candidate user loaded.

        Raises:
            NotFoundError: If the subject does not exist
        """
        self._require_user(user_id)
        return self.matches.history_for(user_id)
