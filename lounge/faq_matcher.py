"""
Heuristic FAQ matching for the Captain's assistant.

Each corpus entry is scored independently against the query with a handful
of additive signals (question containment, alternate phrasings, tags, token
overlap), weak candidates are dropped and the rest ranked by score.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .faq_data import FaqEntry, get_corpus


class MatchType(str, Enum):
    EXACT = "exact"
    PHRASE = "phrase"
    TAG = "tag"
    FUZZY = "fuzzy"


@dataclass(frozen=True)
class MatchWeights:
    exact: int = 100
    phrase: int = 80
    tag: int = 60
    overlap: int = 20
    partial: int = 10
    # Candidates must score strictly above this to be returned
    min_score: int = 30
    min_token_length: int = 3
    partial_min_length: int = 4


DEFAULT_WEIGHTS = MatchWeights()

_TRAILING_PUNCTUATION = "?!.,;:"


@dataclass(frozen=True)
class MatchCandidate:
    entry: FaqEntry
    score: int
    match_type: MatchType


def normalize_query(query: Optional[str]) -> str:
    return (query or "").lower().strip().rstrip(_TRAILING_PUNCTUATION).strip()


def tokenize(normalized: str, min_length: int = DEFAULT_WEIGHTS.min_token_length) -> List[str]:
    return [word for word in normalized.split() if len(word) >= min_length]


def _haystack(entry: FaqEntry) -> str:
    return f"{entry.question} {' '.join(entry.alt_phrases)} {' '.join(entry.tags)}".lower()


def score_entry(
    entry: FaqEntry,
    normalized: str,
    tokens: Sequence[str],
    weights: MatchWeights = DEFAULT_WEIGHTS,
) -> Tuple[int, MatchType]:
    score = 0
    match_type = MatchType.FUZZY

    if normalized in entry.question.lower():
        score += weights.exact
        match_type = MatchType.EXACT

    for phrase in entry.alt_phrases:
        phrase = phrase.lower()
        if phrase in normalized or normalized in phrase:
            score += weights.phrase
            if match_type is MatchType.FUZZY:
                match_type = MatchType.PHRASE

    for tag in entry.tags:
        if tag.lower() in tokens:
            score += weights.tag
            if match_type is MatchType.FUZZY:
                match_type = MatchType.TAG

    haystack = _haystack(entry)
    for token in tokens:
        if token in haystack:
            score += weights.overlap

    # Second pass over the same haystack; longer tokens counted in the loop
    # above are counted again here.
    for token in tokens:
        if len(token) >= weights.partial_min_length and token in haystack:
            score += weights.partial

    return score, match_type


class FaqMatcher:
    def __init__(self, corpus: Optional[Sequence[FaqEntry]] = None,
                 weights: MatchWeights = DEFAULT_WEIGHTS):
        self.corpus = tuple(corpus) if corpus is not None else get_corpus()
        self.weights = weights

    def match(self, query: Optional[str], limit: int = 3) -> List[MatchCandidate]:
        """Rank corpus entries for ``query``, best first.

        Queries with no token of at least three characters return an empty
        list. Entries scoring at or below ``weights.min_score`` are dropped,
        ties keep corpus order and at most ``limit`` candidates come back.
        """
        normalized = normalize_query(query)
        tokens = tokenize(normalized, self.weights.min_token_length)
        if not tokens:
            return []

        candidates: List[MatchCandidate] = []
        for entry in self.corpus:
            score, match_type = score_entry(entry, normalized, tokens, self.weights)
            if score > self.weights.min_score:
                candidates.append(MatchCandidate(entry=entry, score=score, match_type=match_type))

        # list.sort is stable, so equal scores stay in corpus order
        candidates.sort(key=lambda c: c.score, reverse=True)
        return candidates[:max(limit, 0)]


_default_matcher = FaqMatcher()


def match_faq(query: Optional[str], corpus: Optional[Sequence[FaqEntry]] = None,
              limit: int = 3) -> List[MatchCandidate]:
    matcher = _default_matcher if corpus is None else FaqMatcher(corpus)
    return matcher.match(query, limit=limit)
