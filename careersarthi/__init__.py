"""CareerSarthi job matching: search, score and rank job postings."""

__version__ = "0.1.0"
