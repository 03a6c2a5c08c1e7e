"""
Match history storage.

Uses SQLite with SQLAlchemy to keep ranked matches from past searches.
"""

from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from sqlalchemy import create_engine, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base, sessionmaker

from .models import JobPosting, ScoredMatch
from .normalize import canonical_url, normalize_text

Base = declarative_base()


class MatchRecord(Base):
    """One ranked posting from one search."""

    __tablename__ = "job_matches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    search_title = Column(String, nullable=False, index=True)  # normalized
    title = Column(String, nullable=False, default="")
    company = Column(String, nullable=False, default="")
    location = Column(String, nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    url = Column(String, nullable=False, default="")
    match_score = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def to_match(self) -> ScoredMatch:
        posting = JobPosting(
            title=self.title,
            company_name=self.company,
            location=self.location,
            description=self.description,
            url=self.url,
        )
        return ScoredMatch(posting=posting, match_score=self.match_score)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()


def save_matches(db_path: Path, search_title: str, matches: Iterable[ScoredMatch]) -> int:
    """Persist matches for a search. Returns the number of rows added."""
    init_database(db_path)
    session = get_session(db_path)
    key = normalize_text(search_title)
    try:
        count = 0
        for m in matches:
            p = m.posting
            session.add(MatchRecord(
                search_title=key,
                title=p.title,
                company=p.company_name,
                location=p.location,
                description=p.description,
                url=canonical_url(p.url) if p.url else "",
                match_score=m.match_score,
            ))
            count += 1
        session.commit()
        return count
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def load_matches(db_path: Path, search_title: Optional[str] = None) -> List[ScoredMatch]:
    """Stored matches, best first, optionally for one search title."""
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        query = session.query(MatchRecord)
        if search_title is not None:
            query = query.filter_by(search_title=normalize_text(search_title))
        rows = query.order_by(MatchRecord.match_score.desc(), MatchRecord.id).all()
        return [r.to_match() for r in rows]
    finally:
        session.close()
