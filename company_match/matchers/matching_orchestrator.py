# company_match/matchers/matching_orchestrator.py

from typing import Callable, Optional, Tuple
from loguru import logger

from company_match.config import EARLY_EXIT_SCORE, FALLBACK_ENABLED
from company_match.fuzzy_index import FuzzyIndex
from company_match.models import MatchQuery, MatchResult
from company_match.matchers.exact_matcher import (
    exact_domain_match,
    exact_facebook_match,
    exact_phone_match,
)
from company_match.matchers.fuzzy_matcher import combined_match, fallback_match, fuzzy_name_match

Strategy = Callable[[MatchQuery, FuzzyIndex], Optional[MatchResult]]

# Tried in this order; the first result at or above the early-exit score wins
CASCADE: Tuple[Tuple[str, Strategy], ...] = (
    ("exact_domain", exact_domain_match),
    ("exact_phone", exact_phone_match),
    ("exact_facebook", exact_facebook_match),
    ("fuzzy_name", fuzzy_name_match),
    ("combined", combined_match),
)


def matching_orchestrator(
    query: MatchQuery,
    index: FuzzyIndex,
    early_exit_score: float = EARLY_EXIT_SCORE,
    fallback_enabled: bool = FALLBACK_ENABLED,
) -> Optional[MatchResult]:
    """
    Run the matching cascade for a single query against one index snapshot.

    Args:
        query (MatchQuery): Query to resolve.
        index (FuzzyIndex): Index snapshot; held for the whole call.
        early_exit_score (float): Score at which a strategy result is accepted immediately.
        fallback_enabled (bool): Whether to return a weak lexical match when nothing else qualifies.

    Returns:
        Optional[MatchResult]: Best match, or None if nothing was found.
    """
    if query.is_empty():
        return None

    for name, strategy in CASCADE:
        result = strategy(query, index)
        if result is not None and result.score >= early_exit_score:
            logger.debug(f"Strategy {name} accepted {result}")
            return result
        if result is not None:
            logger.debug(f"Strategy {name} below threshold: {result}")

    if not fallback_enabled:
        return None

    result = fallback_match(query, index)
    logger.debug(f"Fallback result: {result}")
    return result
