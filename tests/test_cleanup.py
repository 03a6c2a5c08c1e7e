"""Tests for stale match cleanup."""

from datetime import datetime, timedelta

from careersarthi.cleanup import cleanup_stale_matches
from careersarthi.database import MatchRecord, get_session, init_database


def _add(db_path, title, created_at):
    session = get_session(db_path)
    session.add(MatchRecord(search_title="engineer", title=title, match_score=90, created_at=created_at))
    session.commit()
    session.close()


class TestCleanup:
    """Test stale match cleanup functionality."""

    def test_cleanup_removes_stale_matches(self, tmp_path):
        db_path = tmp_path / "matches.db"
        init_database(db_path)
        now = datetime.now()
        _add(db_path, "old", now - timedelta(days=10))
        _add(db_path, "new", now - timedelta(days=2))

        before, after = cleanup_stale_matches(db_path, days=7)

        assert (before, after) == (2, 1)
        session = get_session(db_path)
        assert [r.title for r in session.query(MatchRecord).all()] == ["new"]
        session.close()

    def test_cleanup_keeps_recent_matches(self, tmp_path):
        db_path = tmp_path / "matches.db"
        init_database(db_path)
        _add(db_path, "fresh", datetime.now())

        assert cleanup_stale_matches(db_path, days=7) == (1, 1)

    def test_cleanup_missing_database(self, tmp_path):
        assert cleanup_stale_matches(tmp_path / "missing.db") == (0, 0)
