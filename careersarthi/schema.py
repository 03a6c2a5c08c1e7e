from typing import Any, Dict, List
from urllib.parse import urlparse

from .models import JobPosting, SearchCriteria

POSTING_STR_FIELDS = [
    "title",
    "company",
    "location",
    "description",
    "url",
]


class InvalidInputError(ValueError):
    """Raised when a request or posting list cannot be used as input."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input")


def _valid_url(v: str) -> bool:
    try:
        p = urlparse(v)
        return bool(p.scheme and p.netloc)
    except ValueError:
        return False


def validate_posting(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Every field is optional; missing or null fields score as empty text.
    """
    if not isinstance(data, dict):
        return ["Posting must be an object"]

    errors: List[str] = []
    for f in POSTING_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    if isinstance(data.get("url"), str) and data["url"].strip():
        if not _valid_url(data["url"]):
            errors.append("Field 'url' must be a valid absolute URL (scheme + host)")

    return errors


def validate_match_request(data: Dict[str, Any]) -> List[str]:
    if not isinstance(data, dict):
        return ["Request must be an object"]

    errors: List[str] = []
    if "jobTitle" not in data or data["jobTitle"] is None:
        errors.append("Missing required field: jobTitle")
    elif not isinstance(data["jobTitle"], str):
        errors.append("Field 'jobTitle' must be a string")

    skills = data.get("skills")
    if skills is not None:
        if not isinstance(skills, list):
            errors.append("Field 'skills' must be a list of strings")
        elif not all(isinstance(s, str) for s in skills):
            errors.append("Field 'skills' must contain only strings")

    return errors


def parse_match_request(data: Dict[str, Any]) -> SearchCriteria:
    """Validate a match request payload and build SearchCriteria.

    Raises InvalidInputError listing every problem found.
    """
    errors = validate_match_request(data)
    if errors:
        raise InvalidInputError(errors)
    return SearchCriteria(
        target_title=data["jobTitle"],
        skills=tuple(data.get("skills") or ()),
    )


def coerce_postings(items: Any) -> List[JobPosting]:
    """Turn a list of raw posting dicts into JobPostings.

    Field gaps default to empty strings; only a non-list input is an error.
    """
    if not isinstance(items, list):
        raise InvalidInputError(["Postings must be a list"])
    postings = []
    for i, item in enumerate(items):
        if isinstance(item, JobPosting):
            postings.append(item)
        elif isinstance(item, dict):
            postings.append(JobPosting.from_dict(item))
        else:
            raise InvalidInputError([f"Posting {i} must be an object"])
    return postings
