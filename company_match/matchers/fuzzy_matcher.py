from typing import List, Optional
from company_match.config import (
    FALLBACK_MIN_SCORE,
    FIELD_BONUSES,
    NAME_FIELDS,
    NAME_HIGH_CONFIDENCE,
    NAME_MATCH_THRESHOLD,
)
from company_match.fuzzy_index import FuzzyIndex
from company_match.matchers.exact_matcher import domain_matches, facebook_matches, phone_matches
from company_match.models import CompanyRecord, Confidence, MatchQuery, MatchResult
from company_match.normalization import normalize_domain, normalize_name


def is_name_similar(query_name: str, candidate_name: str) -> bool:
    """
    Loose name equivalence used to report which fields matched.

    Names match if one normalized form contains the other, or if at least
    half of the shorter name's words appear in the other name.
    """
    a = normalize_name(query_name)
    b = normalize_name(candidate_name)
    if not a or not b:
        return False
    if a == b or a in b or b in a:
        return True

    a_words = a.split(" ")
    b_words = b.split(" ")
    overlap = sum(1 for word in a_words if word in b_words)
    return overlap >= min(len(a_words), len(b_words)) * 0.5


def determine_matched_fields(query: MatchQuery, company: CompanyRecord) -> List[str]:
    """
    Work out which query fields correspond to a candidate record.

    Args:
        query (MatchQuery): Original query.
        company (CompanyRecord): Candidate returned by the index.

    Returns:
        List[str]: Matched field names in the order domain, phone, facebook, name.
    """
    matched = []
    if domain_matches(query.website, company):
        matched.append("domain")
    if phone_matches(query.phone, company):
        matched.append("phone")
    if facebook_matches(query.facebook, company):
        matched.append("facebook")
    if query.name and any(is_name_similar(query.name, n) for n in company.names()):
        matched.append("name")
    return matched


def combined_score(query: MatchQuery, company: CompanyRecord, dissimilarity: float) -> float:
    """Blend index similarity with fixed bonuses for exact identifier agreement."""
    score = 1.0 - dissimilarity
    weight_sum = 1.0
    checks = (
        ("domain", domain_matches(query.website, company)),
        ("phone", phone_matches(query.phone, company)),
        ("facebook", facebook_matches(query.facebook, company)),
    )
    for field_name, matched in checks:
        if matched:
            score += FIELD_BONUSES[field_name]
            weight_sum += FIELD_BONUSES[field_name]
    return min(1.0, score / weight_sum)


def confidence_for_score(score: float) -> Confidence:
    if score >= 0.8:
        return Confidence.HIGH
    if score >= 0.6:
        return Confidence.MEDIUM
    return Confidence.LOW


def fuzzy_name_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """
    Approximate match of the query name against the name-bearing fields.

    Args:
        query (MatchQuery): Input query; requires `name`.
        index (FuzzyIndex): Current index snapshot.

    Returns:
        Optional[MatchResult]: Best candidate if its dissimilarity is within the
            name threshold; high confidence for near-exact names, else medium.
    """
    if not query.name or not query.name.strip():
        return None

    results = index.search(query.name, fields=NAME_FIELDS)
    if not results:
        return None
    company, dissimilarity = results[0]
    if dissimilarity > NAME_MATCH_THRESHOLD:
        return None

    return MatchResult(
        company=company,
        score=1.0 - dissimilarity,
        matched_fields=["name"],
        confidence=Confidence.HIGH if dissimilarity <= NAME_HIGH_CONFIDENCE else Confidence.MEDIUM,
        strategy="fuzzy_name",
    )


def combined_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """
    Search all query fields at once and reward exact identifier agreement.

    The website is reduced to a bare domain before it joins the composite query.
    """
    parts = [
        query.name,
        normalize_domain(query.website) if query.website else None,
        query.phone,
        query.facebook,
    ]
    search_query = " ".join(p for p in parts if p)
    if not search_query.strip():
        return None

    results = index.search(search_query)
    if not results:
        return None
    company, dissimilarity = results[0]
    score = combined_score(query, company, dissimilarity)

    return MatchResult(
        company=company,
        score=score,
        matched_fields=determine_matched_fields(query, company),
        confidence=confidence_for_score(score),
        strategy="combined",
    )


def fallback_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """
    Weak last resort: closest lexical candidate for the raw query text.

    May return a record that shares no field with the query; it is always
    reported with low confidence.
    """
    search_query = " ".join(query.present_fields())
    if not search_query:
        return None

    results = index.search(search_query)
    if not results:
        return None
    company, dissimilarity = results[0]

    return MatchResult(
        company=company,
        score=max(FALLBACK_MIN_SCORE, 1.0 - dissimilarity),
        matched_fields=determine_matched_fields(query, company),
        confidence=Confidence.LOW,
        strategy="fallback",
    )
