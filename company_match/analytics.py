from typing import Sequence
from company_match.models import CrawlAnalytics, CrawledRecord, FillRates


def _percentage(count: int, total: int) -> float:
    return (count / total) * 100 if total else 0.0


def compute_crawl_analytics(records: Sequence[CrawledRecord], total_duration_ms: int) -> CrawlAnalytics:
    """
    Summarize coverage and field fill rates of a crawl batch.

    Args:
        records (Sequence[CrawledRecord]): Every result of the batch, failed ones included.
        total_duration_ms (int): Wall-clock duration of the whole batch.

    Returns:
        CrawlAnalytics: Counts and percentages over the full batch size.
    """
    total = len(records)
    successful = sum(1 for r in records if r.success)
    with_phones = sum(1 for r in records if r.phone_numbers)
    with_social = sum(1 for r in records if r.social_links.has_any())
    with_address = sum(1 for r in records if r.address)

    return CrawlAnalytics(
        total_websites=total,
        successfully_crawled=successful,
        coverage_percentage=_percentage(successful, total),
        fill_rates=FillRates(
            phone_numbers=_percentage(with_phones, total),
            social_media=_percentage(with_social, total),
            address=_percentage(with_address, total),
        ),
        total_processing_time_ms=total_duration_ms,
    )
