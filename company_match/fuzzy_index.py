"""
Weighted multi-field fuzzy index over the company catalog.

A FuzzyIndex is an immutable snapshot built from one catalog state. The
IndexManager holds the current snapshot and replaces it wholesale on rebuild.
"""
import threading
import time
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger
from rapidfuzz import fuzz, utils

from company_match.config import FIELD_WEIGHTS, FUZZY_THRESHOLD, MIN_FIELD_LENGTH
from company_match.models import CompanyRecord, IndexStats


class IndexNotReadyError(RuntimeError):
    """Raised when a lookup is issued before the index has been built."""


def aligned_similarity(query: str, value: str, score_cutoff: float = 0.0) -> float:
    """
    How well `query` is found inside `value`, in 0-100.

    The partial_ratio alignment is scaled by the share of the query the
    aligned window covers, so a value that only matches part of a longer
    query (or is clipped at an end of the field) scores below 100.
    """
    alignment = fuzz.partial_ratio_alignment(query, value, score_cutoff=score_cutoff)
    if alignment is None or not alignment.score:
        return 0.0
    window = min(alignment.src_end - alignment.src_start, alignment.dest_end - alignment.dest_start)
    return alignment.score * min(1.0, window / len(query))


def _field_values(record: CompanyRecord, field_name: str) -> List[str]:
    if field_name == "phone_numbers":
        return [p for p in record.phone_numbers if p]
    if field_name == "facebook":
        return [record.social_links.facebook] if record.social_links.facebook else []
    value = getattr(record, field_name, None)
    return [value] if value else []


class FuzzyIndex:
    """
    Approximate lookup of catalog records by free text.

    Each field is scored with a coverage-scaled partial_ratio, which ignores where
    in the field text the best alignment falls. A field only counts when its
    dissimilarity is within `threshold`; its weighted dissimilarity is
    `d ** (1 + weight)`, and a record takes the best of its fields.
    """

    def __init__(
        self,
        records: Iterable[CompanyRecord],
        weights: Optional[Dict[str, float]] = None,
        threshold: float = FUZZY_THRESHOLD,
    ):
        self.records: Tuple[CompanyRecord, ...] = tuple(records)
        self.weights = dict(weights or FIELD_WEIGHTS)
        self.threshold = threshold
        # field name -> (processed values, position of the owning record)
        self._choices: Dict[str, Tuple[List[str], List[int]]] = {}
        for field_name in self.weights:
            values: List[str] = []
            owners: List[int] = []
            for pos, record in enumerate(self.records):
                for raw in _field_values(record, field_name):
                    processed = utils.default_process(raw)
                    if len(processed) >= MIN_FIELD_LENGTH:
                        values.append(processed)
                        owners.append(pos)
            self._choices[field_name] = (values, owners)

    def __len__(self) -> int:
        return len(self.records)

    def search(
        self,
        query: str,
        fields: Optional[Sequence[str]] = None,
    ) -> List[Tuple[CompanyRecord, float]]:
        """
        Rank records against a free-text query.

        Args:
            query (str): Raw query text.
            fields (Optional[Sequence[str]]): Restrict matching to these fields (default: all weighted fields).

        Returns:
            List[Tuple[CompanyRecord, float]]: (record, dissimilarity) pairs, best first.
                Dissimilarity is in [0, threshold]; ties are broken by whole-string
                similarity of the aligned field, then catalog order.
        """
        processed = utils.default_process(query) if query else ""
        if not processed:
            return []

        cutoff = round((1.0 - self.threshold) * 100, 6)
        best: Dict[int, Tuple[float, float]] = {}
        for field_name in fields or tuple(self.weights):
            if field_name not in self._choices:
                continue
            values, owners = self._choices[field_name]
            if not values:
                continue
            weight = self.weights[field_name]
            for value, pos in zip(values, owners):
                similarity = aligned_similarity(processed, value, score_cutoff=cutoff)
                if similarity < cutoff:
                    continue
                dissimilarity = round((1.0 - similarity / 100.0) ** (1.0 + weight), 6)
                tiebreak = 1.0 - fuzz.ratio(processed, value) / 100.0
                key = (dissimilarity, tiebreak)
                if pos not in best or key < best[pos]:
                    best[pos] = key

        ranked = sorted(best.items(), key=lambda item: (item[1], item[0]))
        return [(self.records[pos], key[0]) for pos, key in ranked]


class IndexManager:
    """
    Owns the current FuzzyIndex snapshot.

    Rebuilds are serialized and publish the new snapshot with a single
    reference swap, so readers see either the old or the new index.
    """

    def __init__(
        self,
        weights: Optional[Dict[str, float]] = None,
        threshold: float = FUZZY_THRESHOLD,
    ):
        self.weights = weights
        self.threshold = threshold
        self._index: Optional[FuzzyIndex] = None
        self._rebuild_lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    def rebuild(self, records: Iterable[CompanyRecord]) -> FuzzyIndex:
        """Build a new index from a catalog snapshot and swap it in."""
        with self._rebuild_lock:
            start = time.perf_counter()
            index = FuzzyIndex(records, weights=self.weights, threshold=self.threshold)
            self._index = index
            duration = time.perf_counter() - start
        logger.info(f"Search index initialized with {len(index)} companies in {duration:.2f}s")
        return index

    def current(self) -> FuzzyIndex:
        index = self._index
        if index is None:
            raise IndexNotReadyError("Search index not initialized")
        return index

    def stats(self) -> IndexStats:
        index = self._index
        return IndexStats(
            total_companies=len(index) if index is not None else 0,
            indexed=index is not None,
        )
