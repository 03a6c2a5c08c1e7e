import csv
import json
from typing import IO, Iterable

from .models import ScoredMatch

CSV_HEADER = ["Job Title", "Company", "Location", "Description", "Match Score", "URL"]


def write_csv(matches: Iterable[ScoredMatch], fh: IO[str]) -> int:
    """Write matches as CSV rows; returns the number of rows written."""
    writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADER)
    count = 0
    for m in matches:
        p = m.posting
        writer.writerow([p.title, p.company_name, p.location, p.description, m.match_score, p.url])
        count += 1
    return count


def matches_to_json(matches: Iterable[ScoredMatch], indent: int = 2) -> str:
    return json.dumps([m.to_dict() for m in matches], indent=indent, ensure_ascii=False)
