"""
Job match scoring and ranking.

A posting's match score blends three lexical overlaps into 0-100:

- title overlap (30): search-title tokens found in the posting title
- skills overlap (40): candidate skills found in the posting description
- description relevance (30): search-title tokens found in the description

Matching is case-insensitive substring containment, so "java" matches
"javascript". Scores are rounded half-up.
"""

import math
from typing import Dict, List, Optional, Sequence

from .models import JobPosting, ScoredMatch
from .schema import InvalidInputError

TITLE_WEIGHT = 30
SKILLS_WEIGHT = 40
DESCRIPTION_WEIGHT = 30

MATCH_THRESHOLD = 75
MAX_MATCHES = 100


def _lower(value: Optional[str]) -> str:
    return value.lower() if isinstance(value, str) else ""


def title_tokens(target_title: Optional[str]) -> List[str]:
    return [t for t in _lower(target_title).split() if t]


def _overlap(terms: Sequence[str], text: str, weight: int) -> float:
    if not terms:
        return 0.0
    found = sum(1 for term in terms if term in text)
    return found / len(terms) * weight


def score_breakdown(
    posting: JobPosting,
    target_title: Optional[str],
    skills: Optional[Sequence[str]] = None,
) -> Dict[str, float]:
    """
    Return the unrounded sub-scores for a posting.

    Keys: title, skills, description, total (clamped to 100).
    """
    tokens = title_tokens(target_title)
    title = _lower(posting.title)
    description = _lower(posting.description)
    skill_terms = [_lower(s) for s in (skills or [])]

    parts = {
        "title": _overlap(tokens, title, TITLE_WEIGHT),
        "skills": _overlap(skill_terms, description, SKILLS_WEIGHT),
        "description": _overlap(tokens, description, DESCRIPTION_WEIGHT),
    }
    parts["total"] = min(100.0, parts["title"] + parts["skills"] + parts["description"])
    return parts


def score(
    posting: JobPosting,
    target_title: Optional[str],
    skills: Optional[Sequence[str]] = None,
) -> int:
    """Score a posting against a search title and skill list (0-100)."""
    total = score_breakdown(posting, target_title, skills)["total"]
    return max(0, min(100, int(math.floor(total + 0.5))))


def rank_matches(
    postings: Sequence[JobPosting],
    target_title: str,
    skills: Optional[Sequence[str]] = None,
    threshold: int = MATCH_THRESHOLD,
    limit: int = MAX_MATCHES,
) -> List[ScoredMatch]:
    """
    Score every posting and return the confident matches, best first.

    Duplicates are scored independently. Ties keep their input order
    (sorted() is stable).

    Args:
        postings: Postings to score
        target_title: Title the user searched for
        skills: Candidate skills, may be empty
        threshold: Minimum score to keep (default: 75)
        limit: Maximum number of matches returned (default: 100)

    Returns:
        List of ScoredMatch, possibly empty

    Raises:
        InvalidInputError: If target_title is not a string or postings is
            not a list or tuple. An empty title is valid.
    """
    errors = []
    if not isinstance(target_title, str):
        errors.append("target_title must be a string")
    if not isinstance(postings, (list, tuple)):
        errors.append("postings must be a list")
    if errors:
        raise InvalidInputError(errors)

    skills = list(skills or [])
    scored = [ScoredMatch(p, score(p, target_title, skills)) for p in postings]
    kept = [m for m in scored if m.match_score >= threshold]
    kept = sorted(kept, key=lambda m: m.match_score, reverse=True)
    return kept[:limit]
