"""Lightweight ranking of memory records: BM25 plus chronological-cue detection."""

import math
import re

from rank_bm25 import BM25Okapi

from tonepilot.memory.types import MemoryRecord

BM25_K1 = 1.5
BM25_B = 0.75
MIN_TERM_LENGTH = 3

_PUNCTUATION = re.compile(r"[^\w\s]")

# Requests about conversation order rather than topic
CHRONOLOGICAL_PATTERNS = [
    re.compile(r"\b(previous|previously|last|recent|recently|earlier|before|past|ago)\b", re.IGNORECASE),
    re.compile(r"\bwhat\s+did\s+(i|we)\b", re.IGNORECASE),
    re.compile(r"\b(remind\s+me|recall)\b", re.IGNORECASE),
    re.compile(r"\bhistory\b", re.IGNORECASE),
    re.compile(r"\bjust\s+now\b", re.IGNORECASE),
]


def tokenize(text: str) -> list[str]:
    """
    Lowercase, strip punctuation, split on whitespace, drop short tokens.

    Tokens of two characters or fewer ("a", "an", "is") carry no ranking
    signal and are discarded.
    """
    cleaned = _PUNCTUATION.sub(" ", text.lower())
    return [t for t in cleaned.split() if len(t) >= MIN_TERM_LENGTH]


def is_chronological_query(query: str) -> bool:
    """True when the query asks about earlier turns instead of a topic."""
    return any(p.search(query) for p in CHRONOLOGICAL_PATTERNS)


class BM25Scorer(BM25Okapi):
    """
    Okapi BM25 over a fixed, non-empty set of memory records.

    Document frequency counts records whose lowercased text contains the term
    as a substring, not as a whole token, so "mail" also counts documents
    mentioning "email". idf = ln((N - df + 0.5) / (df + 0.5) + 1) is always
    positive, so BM25Okapi's epsilon floor is not needed.
    """

    def __init__(self, records: list[MemoryRecord], k1: float = BM25_K1, b: float = BM25_B):
        self.records = list(records)
        self._texts = [r.document.lower() for r in self.records]
        super().__init__([tokenize(r.document) for r in self.records], k1=k1, b=b)

    def _calc_idf(self, nd: dict[str, int]) -> None:
        for term in nd:
            df = sum(1 for text in self._texts if term in text)
            self.idf[term] = math.log((self.corpus_size - df + 0.5) / (df + 0.5) + 1)

    def score_query(self, query: str) -> list[float]:
        """Score every record against a raw query, in record order."""
        if self.avgdl == 0:
            # no record has a usable token
            return [0.0] * self.corpus_size
        return [float(s) for s in self.get_scores(tokenize(query))]


def bm25_score(query: str, record: MemoryRecord, corpus: list[MemoryRecord]) -> float:
    """Score a single record against the query, with statistics from `corpus`."""
    for i, candidate in enumerate(corpus):
        if candidate.id == record.id:
            return BM25Scorer(corpus).score_query(query)[i]
    raise ValueError(f"Record {record.id} is not part of the corpus")
