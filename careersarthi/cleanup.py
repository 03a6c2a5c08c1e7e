"""
Cleanup module for removing stale job matches.

Stale matches are those saved more than a given number of days ago
(default: 7). Job listings expire quickly, so old matches are noise.
"""

from datetime import datetime, timedelta
from pathlib import Path
from typing import Tuple

from .database import MatchRecord, get_session
from .logger import get_logger


def cleanup_stale_matches(db_path: Path, days: int = 7) -> Tuple[int, int]:
    """
    Remove matches older than the specified number of days.

    Args:
        db_path: Path to SQLite match database
        days: Number of days to keep matches (default: 7)

    Returns:
        Tuple of (total_matches_before, total_matches_after)
    """
    logger = get_logger()
    if not db_path.exists():
        logger.info("No match database to clean", path=str(db_path))
        return (0, 0)

    cutoff = datetime.now() - timedelta(days=days)
    session = get_session(db_path)
    try:
        before = session.query(MatchRecord).count()
        session.query(MatchRecord).filter(MatchRecord.created_at < cutoff).delete(
            synchronize_session=False
        )
        session.commit()
        after = session.query(MatchRecord).count()
    except Exception as e:
        session.rollback()
        logger.error(f"Cleanup failed: {e}", days=days)
        raise
    finally:
        session.close()

    logger.info(
        f"Cleanup complete: {before - after} removed, {after} remaining",
        matches_before=before,
        matches_after=after,
        days_threshold=days,
    )
    return (before, after)
