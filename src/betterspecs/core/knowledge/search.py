"""
Weighted fuzzy full-text search.

Each index covers a fixed set of record fields, each with a weight. A query
is compared against every field with rapidfuzz; fields whose distance stays
within the threshold contribute to the record score, heavier fields more
strongly.
"""

from typing import Dict, Generic, Iterable, List, NamedTuple, Optional, Sequence, Tuple, TypeVar

from rapidfuzz import fuzz

from ...domain.constants import (
    DEFAULT_SEARCH_THRESHOLD,
    EXAMPLE_FIELD_WEIGHTS,
    GUIDELINE_FIELD_WEIGHTS,
)
from ...domain.models import CodeExample, Guideline

T = TypeVar("T")

# Floor for a perfect field match so the weight still orders results
EPSILON = 0.001


class SearchHit(NamedTuple, Generic[T]):
    """A matching record with its score (0 is best) and insertion position."""
    item: T
    score: float
    position: int


def text_distance(needle: str, text: str) -> float:
    """
    Distance between a lower-cased query and one field value.

    0.0 means the query occurs verbatim in the text, 1.0 means nothing in
    common. A query no longer than the text is aligned against its best
    matching substring; a longer query is compared as a whole.
    """
    if not text:
        return 1.0
    if len(needle) <= len(text):
        similarity = fuzz.partial_ratio(needle, text)
    else:
        similarity = fuzz.ratio(needle, text)
    return 1.0 - similarity / 100.0


class FuzzyIndex(Generic[T]):
    """
    Immutable weighted fuzzy index over a fixed list of records.

    Args:
        records: Records to index; their order is the tie-break order
        weights: Field name -> weight. List-valued fields match on their
            best element.
        threshold: Maximum per-field distance that still counts as a match
    """

    def __init__(
        self,
        records: Iterable[T],
        weights: Dict[str, float],
        threshold: float = DEFAULT_SEARCH_THRESHOLD,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Threshold must be between 0 and 1, got {threshold}")
        self.weights = dict(weights)
        self.threshold = threshold
        self._records: List[T] = list(records)
        self._documents: List[Dict[str, Tuple[str, ...]]] = [
            {name: _field_values(record, name) for name in self.weights}
            for record in self._records
        ]

    def __len__(self) -> int:
        return len(self._records)

    def search(self, query: str) -> List[SearchHit[T]]:
        """
        Rank records against a query.

        Returns:
            Hits sorted best first; equal scores keep insertion order. An empty
            or blank query returns an empty list.
        """
        needle = query.strip().lower() if query else ""
        if not needle:
            return []

        hits = []
        for position, document in enumerate(self._documents):
            score = self._score(needle, document)
            if score is not None:
                hits.append(SearchHit(self._records[position], score, position))

        hits.sort(key=lambda hit: (hit.score, hit.position))
        return hits

    def _score(self, needle: str, document: Dict[str, Tuple[str, ...]]) -> Optional[float]:
        score = 1.0
        matched = False
        for name, weight in self.weights.items():
            values = document[name]
            if not values:
                continue
            distance = min(text_distance(needle, value) for value in values)
            if distance > self.threshold:
                continue
            matched = True
            score *= max(distance, EPSILON) ** weight
        return score if matched else None


def _field_values(record: object, name: str) -> Tuple[str, ...]:
    value = getattr(record, name, None)
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v).lower() for v in value if v)
    return (str(value).lower(),)


def build_indices(
    guidelines: Sequence[Guideline],
    examples: Sequence[CodeExample],
    threshold: float = DEFAULT_SEARCH_THRESHOLD,
) -> Tuple[FuzzyIndex[Guideline], FuzzyIndex[CodeExample]]:
    """
    Build the guideline and example indices.

    Guidelines are weighted title 0.4, content 0.3, tags 0.2, category 0.1;
    examples title 0.3, description 0.3, scenario 0.2, tags 0.2.
    """
    return (
        FuzzyIndex(guidelines, GUIDELINE_FIELD_WEIGHTS, threshold),
        FuzzyIndex(examples, EXAMPLE_FIELD_WEIGHTS, threshold),
    )
