from .memory_source import InMemoryCandidateSource
from .sqlite_source import SqliteCandidateSource

__all__ = ["InMemoryCandidateSource", "SqliteCandidateSource"]
