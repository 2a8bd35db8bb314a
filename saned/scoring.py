"""
Scoring Logic for user matching.

Responsibilities:
- Compute a deterministic compatibility score between a subject and each candidate.
- Emit the shared tags and a one-sentence highlight explaining the match.
- Rank candidates and keep the top few.

Non-Responsibilities:
- No database access.
- No persistence of results.

Invariant:
Given identical inputs, this module must always return
the same scores, shared tags, highlights and ordering.
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Sequence

TAG_WEIGHT = 0.5
ROLE_WEIGHT = 0.3
LOCATION_WEIGHT = 0.2

NO_OVERLAP_SIMILARITY = 0.1
SAME_ROLE_SCORE = 1.0
OTHER_ROLE_SCORE = 0.5
SAME_LOCATION_SCORE = 1.0
OTHER_LOCATION_SCORE = 0.3

MAX_RESULTS = 5

FALLBACK_ORGANIZATION = "the industry"


@dataclass
class MatchResult:
    candidate: Any
    match_score: int
    shared_tags: List[str] = field(default_factory=list)
    highlight: str = ""


def list_to_string(items: Sequence[str]) -> str:
    """Join items for prose: "a", "a and b", "a, b, and c"."""
    if len(items) == 0:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def get_user_tags(user) -> List[str]:
    # interests only stand in when tags were never set; an empty tag list is kept
    if user.tags is not None:
        return list(user.tags)
    return list(user.interests or [])


def _location(user) -> str:
    return user.location or ""


def tag_similarity(subject_tags: Sequence[str], candidate_tags: Sequence[str], shared_tags: Sequence[str]) -> float:
    """Share of the larger tag list that overlaps. No overlap scores NO_OVERLAP_SIMILARITY."""
    denominator = max(len(subject_tags), len(candidate_tags))
    if denominator == 0 or not shared_tags:
        return NO_OVERLAP_SIMILARITY
    return len(shared_tags) / denominator


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def generate_highlight(subject, candidate, shared_tags: Sequence[str]) -> str:
    """First matching rule wins."""
    same_role = candidate.role == subject.role
    same_location = _location(candidate) == _location(subject)
    organization = candidate.organization or FALLBACK_ORGANIZATION

    if same_role:
        if shared_tags:
            return f"Both {subject.role}s with shared interests in {list_to_string(shared_tags)}."
        return f"Fellow {subject.role} in {organization}."

    if len(shared_tags) >= 3:
        return (
            f"Strong match with {candidate.first_name} across multiple areas: "
            f"{list_to_string(shared_tags)}."
        )

    if same_location:
        if shared_tags:
            return f"Based in {_location(candidate)} with shared interests in {list_to_string(shared_tags)}."
        return f"Located in {_location(candidate)} with complementary expertise."

    if shared_tags:
        return f"{candidate.first_name} shares your passion for {list_to_string(shared_tags)}."

    return f"{candidate.first_name} works in {organization} with complementary expertise."


def score_candidate(subject, candidate) -> MatchResult:
    """Score a single candidate against the subject."""
    subject_tags = get_user_tags(subject)
    candidate_tags = get_user_tags(candidate)
    subject_tag_set = set(subject_tags)

    shared_tags = [tag for tag in candidate_tags if tag in subject_tag_set]

    similarity = tag_similarity(subject_tags, candidate_tags, shared_tags)
    role_score = SAME_ROLE_SCORE if candidate.role == subject.role else OTHER_ROLE_SCORE
    location_score = (
        SAME_LOCATION_SCORE if _location(candidate) == _location(subject) else OTHER_LOCATION_SCORE
    )

    match_score = round_half_up(
        (similarity * TAG_WEIGHT + role_score * ROLE_WEIGHT + location_score * LOCATION_WEIGHT) * 100
    )

    return MatchResult(
        candidate=candidate,
        match_score=match_score,
        shared_tags=shared_tags,
        highlight=generate_highlight(subject, candidate, shared_tags),
    )


def compute_matches(subject, candidates: Sequence[Any]) -> List[MatchResult]:
    """
    Rank candidates for a subject.

    Args:
        subject: User the matches are computed for
        candidates: Pool to score; the subject itself is skipped if present

    Returns:
        At most MAX_RESULTS results, highest score first. Ties keep
        their order from `candidates`.
    """
    results = [
        score_candidate(subject, candidate)
        for candidate in candidates
        if candidate.id != subject.id
    ]
    results.sort(key=lambda r: r.match_score, reverse=True)
    return results[:MAX_RESULTS]
