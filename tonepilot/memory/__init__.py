"""
Conversation memory for tonepilot.

Keeps the last N request/response pairs of a session and ranks them against
new requests (BM25, or recency for "what did I ask earlier" style requests).
"""

from tonepilot.memory.retrieval import BM25Scorer, bm25_score, is_chronological_query, tokenize
from tonepilot.memory.store import ContextMemoryStore
from tonepilot.memory.types import MemoryRecord, MemoryStats, RetrievalMode, RetrievalResult

__all__ = [
    "BM25Scorer",
    "ContextMemoryStore",
    "MemoryRecord",
    "MemoryStats",
    "RetrievalMode",
    "RetrievalResult",
    "bm25_score",
    "is_chronological_query",
    "tokenize",
]
