import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from . import __version__
from .adzuna import AdzunaClient
from .cleanup import cleanup_stale_matches
from .config import Settings
from .database import load_matches, save_matches
from .env import load_env
from .export import matches_to_json, write_csv
from .logger import get_logger
from .models import JobPosting, ScoredMatch, SearchCriteria
from .schema import (
    InvalidInputError,
    coerce_postings,
    validate_match_request,
    validate_posting,
)
from .scorer import MATCH_THRESHOLD, MAX_MATCHES, rank_matches, score_breakdown
from .service import match_criteria


def _split_skills(value: Optional[str]) -> List[str]:
    return [s.strip() for s in value.split(",") if s.strip()] if value else []


def _read_json(path_str: str):
    path = Path(path_str)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise SystemExit(f"Invalid JSON in {path}: {e}")


def _print_matches(matches: List[ScoredMatch]) -> None:
    if not matches:
        print("No matching jobs found.")
        return
    print(f"Found {len(matches)} matching jobs:\n")
    for m in matches:
        p = m.posting
        print(f"[{m.match_score:3d}%] {p.title}")
        print(f"  Company: {p.company_name}")
        print(f"  Location: {p.location}")
        print(f"  URL: {p.url}")
        print()


def _write_outputs(args: argparse.Namespace, matches: List[ScoredMatch]) -> None:
    if getattr(args, "csv", None):
        csv_path = Path(args.csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with csv_path.open("w", encoding="utf-8", newline="") as f:
            rows = write_csv(matches, f)
        print(f"Wrote {rows} matches to {csv_path}")
    if getattr(args, "json", None):
        json_path = Path(args.json)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(matches_to_json(matches), encoding="utf-8")
        print(f"Wrote {len(matches)} matches to {json_path}")


def _load_postings(data) -> List[JobPosting]:
    # Raw Adzuna responses are accepted as-is
    if isinstance(data, dict) and isinstance(data.get("results"), list):
        return [JobPosting.from_adzuna(r) for r in data["results"] if isinstance(r, dict)]
    try:
        return coerce_postings(data)
    except InvalidInputError as e:
        raise SystemExit(f"Invalid postings: {e}")


def cmd_match(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    if args.countries:
        countries = tuple(c.strip().lower() for c in args.countries.split(",") if c.strip())
        settings = replace(settings, adzuna=replace(settings.adzuna, countries=countries))
    if settings.adzuna.missing_credentials():
        raise SystemExit("ADZUNA_APP_ID / ADZUNA_API_KEY not set. Set env vars or add them to .env.")

    criteria = SearchCriteria(target_title=args.title, skills=tuple(_split_skills(args.skills)))
    client = AdzunaClient(settings.adzuna)
    print(f"Searching {len(settings.adzuna.countries)} countries for \"{criteria.target_title}\"...")
    matches = match_criteria(criteria, client, threshold=args.threshold, limit=args.limit)
    _print_matches(matches)
    _write_outputs(args, matches)

    if args.save:
        db_path = Path(args.db) if args.db else settings.db_path
        saved = save_matches(db_path, criteria.target_title, matches)
        print(f"Saved {saved} matches to {db_path}")
    get_logger().log_metrics_summary()


def cmd_rank(args: argparse.Namespace) -> None:
    postings = _load_postings(_read_json(args.input))
    matches = rank_matches(
        postings,
        args.title,
        _split_skills(args.skills),
        threshold=args.threshold,
        limit=args.limit,
    )
    print(f"Scored {len(postings)} postings.")
    _print_matches(matches)
    _write_outputs(args, matches)


def cmd_explain(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    errors = validate_posting(data)
    if errors:
        raise SystemExit("Invalid posting: " + "; ".join(errors))
    posting = JobPosting.from_dict(data)
    parts = score_breakdown(posting, args.title, _split_skills(args.skills))
    print(f"Title overlap:        {parts['title']:6.2f} / 30")
    print(f"Skills overlap:       {parts['skills']:6.2f} / 40")
    print(f"Description overlap:  {parts['description']:6.2f} / 30")
    print(f"Total:                {parts['total']:6.2f} / 100")


def cmd_validate(args: argparse.Namespace) -> None:
    data = _read_json(args.input)
    if isinstance(data, list):
        errors = [f"[{i}] {e}" for i, item in enumerate(data) for e in validate_posting(item)]
    elif isinstance(data, dict) and "jobTitle" in data:
        errors = validate_match_request(data)
    else:
        errors = validate_posting(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_history(args: argparse.Namespace) -> None:
    db_path = Path(args.db) if args.db else Settings.from_env().db_path
    if not db_path.exists():
        print(f"Match database not found: {db_path}")
        return
    _print_matches(load_matches(db_path, args.title))


def cmd_cleanup(args: argparse.Namespace) -> None:
    db_path = Path(args.db) if args.db else Settings.from_env().db_path
    before, after = cleanup_stale_matches(db_path, days=args.days)
    print(f"Removed {before - after} stale matches ({after} remaining).")


def _add_ranking_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--title", required=True, help="Job title to match against")
    p.add_argument("--skills", help="Comma-separated skills. Example: \"React,TypeScript\"")
    p.add_argument("--threshold", type=int, default=MATCH_THRESHOLD, help=f"Minimum match score (default {MATCH_THRESHOLD})")
    p.add_argument("--limit", type=int, default=MAX_MATCHES, help=f"Maximum matches returned (default {MAX_MATCHES})")
    p.add_argument("--csv", help="Write matches to this CSV file")
    p.add_argument("--json", help="Write matches to this JSON file")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="careersarthi", description="CareerSarthi job matcher")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")

    mat = subparsers.add_parser("match", help="Search Adzuna for a job title and rank the results")
    _add_ranking_args(mat)
    mat.add_argument("--countries", help="Comma-separated Adzuna country codes (default: ADZUNA_COUNTRIES or all)")
    mat.add_argument("--save", action="store_true", help="Store the ranked matches in the match database")
    mat.add_argument("--db", help="Path to match database (default: CAREERSARTHI_DB or data/matches.db)")
    mat.set_defaults(func=cmd_match)

    rnk = subparsers.add_parser("rank", help="Rank postings from a JSON file (list of postings or raw Adzuna response)")
    rnk.add_argument("--input", required=True, help="Path to postings JSON")
    _add_ranking_args(rnk)
    rnk.set_defaults(func=cmd_rank)

    exp = subparsers.add_parser("explain", help="Show the sub-scores for a single posting")
    exp.add_argument("--input", required=True, help="Path to posting JSON")
    exp.add_argument("--title", required=True, help="Job title to match against")
    exp.add_argument("--skills", help="Comma-separated skills")
    exp.set_defaults(func=cmd_explain)

    val = subparsers.add_parser("validate", help="Validate a posting, posting list or match request JSON")
    val.add_argument("--input", required=True, help="Path to JSON input")
    val.set_defaults(func=cmd_validate)

    his = subparsers.add_parser("history", help="List stored matches")
    his.add_argument("--title", help="Only show matches for this search title")
    his.add_argument("--db", help="Path to match database")
    his.set_defaults(func=cmd_history)

    cln = subparsers.add_parser("cleanup", help="Delete stored matches older than --days")
    cln.add_argument("--days", type=int, default=7, help="Keep matches newer than this many days (default 7)")
    cln.add_argument("--db", help="Path to match database")
    cln.set_defaults(func=cmd_cleanup)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    # Load .env if present (ADZUNA_APP_ID, ADZUNA_API_KEY, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        settings = Settings.from_env()
        get_logger(level=settings.log_level, log_dir=settings.log_dir)
        args.func(args)
        return

    parser.print_help(sys.stdout)


if __name__ == "__main__":
    main()
