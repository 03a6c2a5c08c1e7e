"""
Request-level job matching pipeline.

    payload -> SearchCriteria -> postings (search client) -> ranked matches
"""

from typing import Any, Dict, List, Optional, Protocol

from .logger import get_logger
from .models import JobPosting, ScoredMatch, SearchCriteria
from .schema import parse_match_request
from .scorer import MATCH_THRESHOLD, MAX_MATCHES, rank_matches


class JobSearch(Protocol):
    def search(self, what: str) -> List[JobPosting]:
        ...


def match_criteria(
    criteria: SearchCriteria,
    client: JobSearch,
    threshold: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[ScoredMatch]:
    logger = get_logger()
    postings = client.search(criteria.target_title)
    matches = rank_matches(
        postings,
        criteria.target_title,
        criteria.skills,
        threshold=MATCH_THRESHOLD if threshold is None else threshold,
        limit=MAX_MATCHES if limit is None else limit,
    )
    logger.info(
        "Processed matches",
        job_title=criteria.target_title,
        postings=len(postings),
        matches=len(matches),
    )
    return matches


def process_job_match(
    payload: Dict[str, Any],
    client: JobSearch,
    threshold: Optional[int] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Handle a ``{"jobTitle": ..., "skills": [...]}`` request.

    Returns flat match records, best first. An empty list means nothing
    cleared the threshold; bad input raises InvalidInputError instead.
    """
    criteria = parse_match_request(payload)
    return [m.to_dict() for m in match_criteria(criteria, client, threshold, limit)]
