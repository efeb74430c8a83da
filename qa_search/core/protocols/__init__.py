"""Protocol interfaces for dependency injection."""
from .candidate_source import CandidateSourceProtocol

__all__ = [
    "CandidateSourceProtocol",
]
