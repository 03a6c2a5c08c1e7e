"""
Value types passed between the search client, the scorer and the exporters.

All records are request-scoped; nothing here touches storage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class JobPosting:
    """A single job listing as received from the search collaborator."""

    title: str = ""
    company_name: str = ""
    location: str = ""
    description: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobPosting":
        """Build from a flat dict, defaulting missing or non-string fields."""
        return cls(
            title=_text(data.get("title")),
            company_name=_text(data.get("company", data.get("company_name"))),
            location=_text(data.get("location")),
            description=_text(data.get("description")),
            url=_text(data.get("url")),
        )

    @classmethod
    def from_adzuna(cls, result: Dict[str, Any]) -> "JobPosting":
        """Build from one entry of an Adzuna ``results`` array."""
        company = result.get("company") or {}
        location = result.get("location") or {}
        area = location.get("area") if isinstance(location, dict) else None
        if isinstance(area, list) and area:
            loc = ", ".join(str(a) for a in area)
        elif isinstance(location, dict):
            loc = _text(location.get("display_name"))
        else:
            loc = ""
        return cls(
            title=_text(result.get("title")),
            company_name=_text(company.get("display_name")) if isinstance(company, dict) else "",
            location=loc,
            description=_text(result.get("description")),
            url=_text(result.get("redirect_url")),
        )


@dataclass(frozen=True)
class SearchCriteria:
    target_title: str
    skills: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScoredMatch:
    posting: JobPosting
    match_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.posting.title,
            "company": self.posting.company_name,
            "location": self.posting.location,
            "description": self.posting.description,
            "url": self.posting.url,
            "match_score": self.match_score,
        }
