from typing import Optional
from company_match.fuzzy_index import FuzzyIndex
from company_match.models import CompanyRecord, Confidence, MatchQuery, MatchResult
from company_match.normalization import normalize_domain, normalize_phone, normalize_social_handle


def domain_matches(website: Optional[str], company: CompanyRecord) -> bool:
    """True if the website and the company domain share a normalized form."""
    target = normalize_domain(website)
    return bool(target) and normalize_domain(company.domain) == target


def phone_matches(phone: Optional[str], company: CompanyRecord) -> bool:
    """True if any of the company's phone numbers normalizes to the given phone."""
    target = normalize_phone(phone)
    if not target:
        return False
    return any(normalize_phone(p) == target for p in company.phone_numbers)


def facebook_matches(facebook: Optional[str], company: CompanyRecord) -> bool:
    """True if the company's Facebook link points to the same handle."""
    target = normalize_social_handle("facebook", facebook)
    if not target or not company.social_links.facebook:
        return False
    return normalize_social_handle("facebook", company.social_links.facebook) == target


def exact_domain_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """
    Find the catalog record whose domain equals the query website.

    Args:
        query (MatchQuery): Input query; requires `website`.
        index (FuzzyIndex): Current index snapshot, scanned record by record.

    Returns:
        Optional[MatchResult]: Score 1.0, high confidence, or None.
    """
    if not normalize_domain(query.website):
        return None
    for company in index.records:
        if domain_matches(query.website, company):
            return MatchResult(
                company=company,
                score=1.0,
                matched_fields=["domain"],
                confidence=Confidence.HIGH,
                strategy="exact_domain",
            )
    return None


def exact_phone_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """
    Find the first catalog record listing the query phone number.

    Returns:
        Optional[MatchResult]: Score 0.95, high confidence, or None.
    """
    if not normalize_phone(query.phone):
        return None
    for company in index.records:
        if phone_matches(query.phone, company):
            return MatchResult(
                company=company,
                score=0.95,
                matched_fields=["phone"],
                confidence=Confidence.HIGH,
                strategy="exact_phone",
            )
    return None


def exact_facebook_match(query: MatchQuery, index: FuzzyIndex) -> Optional[MatchResult]:
    """Score 0.90 match on the Facebook handle."""
    if not normalize_social_handle("facebook", query.facebook):
        return None
    for company in index.records:
        if facebook_matches(query.facebook, company):
            return MatchResult(
                company=company,
                score=0.9,
                matched_fields=["facebook"],
                confidence=Confidence.HIGH,
                strategy="exact_facebook",
            )
    return None
