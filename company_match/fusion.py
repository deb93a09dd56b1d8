"""
Merge crawled attributes into catalog records.

Each field type has its own reducer: scalars keep the existing value when
present, phone numbers are a set union, and the `other` link list is an
order-preserving deduplicated concatenation. Fusion never creates records.
"""
from dataclasses import replace
from typing import Dict, Iterable, List, Optional
from loguru import logger

from company_match.models import SOCIAL_PLATFORMS, CompanyRecord, CrawledRecord, SocialLinks


def prefer_existing(existing: Optional[str], scraped: Optional[str]) -> Optional[str]:
    """First non-empty value wins."""
    return existing or scraped


def union_values(existing: Iterable[str], scraped: Iterable[str]) -> List[str]:
    """Set union; no duplicates, order not significant."""
    return list(dict.fromkeys([*existing, *scraped]))


def dedup_ordered(existing: Iterable[str], scraped: Iterable[str]) -> List[str]:
    """Concatenate and drop later exact duplicates, keeping first-seen order."""
    seen = set()
    merged = []
    for value in [*existing, *scraped]:
        if value in seen:
            continue
        seen.add(value)
        merged.append(value)
    return merged


def merge_social_links(existing: SocialLinks, scraped: SocialLinks) -> SocialLinks:
    merged = {
        platform: prefer_existing(getattr(existing, platform), getattr(scraped, platform))
        for platform in SOCIAL_PLATFORMS
    }
    return SocialLinks(other=dedup_ordered(existing.other, scraped.other), **merged)


def merge_record(record: CompanyRecord, crawled: CrawledRecord) -> CompanyRecord:
    """Return a copy of `record` enriched with the crawled attributes."""
    return replace(
        record,
        phone_numbers=union_values(record.phone_numbers, crawled.phone_numbers),
        social_links=merge_social_links(record.social_links, crawled.social_links),
        address=prefer_existing(record.address, crawled.address),
        location=prefer_existing(record.location, crawled.location),
    )


def fuse_catalog(
    catalog: Iterable[CompanyRecord],
    crawl_records: Iterable[CrawledRecord],
) -> List[CompanyRecord]:
    """
    Fuse a complete crawl batch into the catalog.

    Args:
        catalog (Iterable[CompanyRecord]): Current catalog snapshot (left untouched).
        crawl_records (Iterable[CrawledRecord]): Crawl results, at most one used per domain.

    Returns:
        List[CompanyRecord]: New catalog in the same order. Records without a
            successful crawl are carried over as-is.
    """
    catalog = list(catalog)
    crawled_by_domain: Dict[str, CrawledRecord] = {}
    for crawled in crawl_records:
        crawled_by_domain[crawled.domain] = crawled

    known = {record.domain for record in catalog}
    for domain in crawled_by_domain:
        if domain not in known:
            logger.debug(f"Ignoring crawl result for unknown domain {domain}")

    fused = []
    merged_count = 0
    for record in catalog:
        crawled = crawled_by_domain.get(record.domain)
        if crawled is not None and crawled.success:
            fused.append(merge_record(record, crawled))
            merged_count += 1
        else:
            fused.append(record)

    logger.info(f"Merged scraped data into {merged_count}/{len(fused)} companies")
    return fused
