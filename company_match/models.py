"""
Typed data models for the company matching pipeline.
All data structures used throughout the codebase should be defined here.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


SOCIAL_PLATFORMS = ("facebook", "twitter", "linkedin", "instagram", "youtube")


@dataclass
class SocialLinks:
    """Social media profile links, one per known platform plus an ordered list of others."""
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None
    youtube: Optional[str] = None
    other: List[str] = field(default_factory=list)

    def has_any(self) -> bool:
        """True if at least one non-empty link is present."""
        if any(getattr(self, platform) for platform in SOCIAL_PLATFORMS):
            return True
        return any(self.other)


@dataclass
class CompanyRecord:
    """Canonical catalog entity. `domain` is the stable identity."""
    domain: str
    commercial_name: Optional[str] = None
    legal_name: Optional[str] = None
    all_names: Optional[str] = None
    phone_numbers: List[str] = field(default_factory=list)  # set semantics, no duplicates
    social_links: SocialLinks = field(default_factory=SocialLinks)
    address: Optional[str] = None
    location: Optional[str] = None

    def names(self) -> List[str]:
        """Present name fields, commercial name first."""
        return [n for n in (self.commercial_name, self.legal_name, self.all_names) if n]


@dataclass
class CrawledRecord:
    """Per-domain scrape result, consumed once by data fusion."""
    domain: str
    phone_numbers: List[str] = field(default_factory=list)
    social_links: SocialLinks = field(default_factory=SocialLinks)
    address: Optional[str] = None
    location: Optional[str] = None
    success: bool = False
    duration_ms: int = 0
    error: Optional[str] = None


@dataclass
class CrawlBatch:
    """Complete result of one crawl pass."""
    records: List[CrawledRecord]
    total_duration_ms: int


@dataclass
class MatchQuery:
    """Partial identifying information about a business."""
    name: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    facebook: Optional[str] = None

    def present_fields(self) -> List[str]:
        """Non-blank field values in declaration order."""
        values = (self.name, self.website, self.phone, self.facebook)
        return [v for v in values if v and v.strip()]

    def is_empty(self) -> bool:
        return not self.present_fields()


class Confidence(str, Enum):
    """Coarse confidence tier derived from a match score."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class MatchResult:
    """Resolved company with its score, matched fields and confidence tier."""
    company: CompanyRecord
    score: float
    matched_fields: List[str]  # subset of domain, phone, facebook, name
    confidence: Confidence
    strategy: str = ""

    def __repr__(self) -> str:
        return (
            f"<MatchResult({self.company.domain}, {self.strategy}, "
            f"score={self.score:.2f}, {self.confidence.value})>"
        )


@dataclass
class IndexStats:
    total_companies: int
    indexed: bool


@dataclass
class QueryOutcome:
    """Result of resolving one query during a bulk run."""
    query: MatchQuery
    match: Optional[MatchResult]

    @property
    def found(self) -> bool:
        return self.match is not None


@dataclass
class BulkResolveReport:
    total: int
    matched_count: int
    match_rate: float  # percentage 0-100
    results: List[QueryOutcome]


@dataclass
class FillRates:
    """Percentage of crawled records carrying each attribute."""
    phone_numbers: float
    social_media: float
    address: float


@dataclass
class CrawlAnalytics:
    """Coverage statistics for one crawl batch."""
    total_websites: int
    successfully_crawled: int
    coverage_percentage: float
    fill_rates: FillRates
    total_processing_time_ms: int
