"""
Company service: owns the catalog and its search index, and exposes the
resolve / fuse / stats / bulk-resolve operations.

The catalog and index are replaced copy-on-write. Writers (load, fuse) are
serialized; readers take a single reference to the current index for the
duration of a query.
"""
import threading
from typing import Any, Dict, Iterable, List, Optional
from loguru import logger

from company_match.analytics import compute_crawl_analytics
from company_match.config import FALLBACK_ENABLED
from company_match.crawler import scrape_websites
from company_match.fusion import fuse_catalog
from company_match.fuzzy_index import IndexManager, IndexNotReadyError
from company_match.matchers import matching_orchestrator
from company_match.models import (
    BulkResolveReport,
    CompanyRecord,
    CrawlAnalytics,
    CrawledRecord,
    IndexStats,
    MatchQuery,
    MatchResult,
    QueryOutcome,
)


class CompanyService:
    """
    Entry point for the outer layers (HTTP handlers, batch runner).

    Usage:
        service = CompanyService()
        service.load_catalog(load_catalog("companies.csv"))
        result = service.resolve(MatchQuery(website="https://www.acme.com/"))
    """

    def __init__(
        self,
        index_manager: Optional[IndexManager] = None,
        fallback_enabled: bool = FALLBACK_ENABLED,
    ):
        self.index_manager = index_manager or IndexManager()
        self.fallback_enabled = fallback_enabled
        self.analytics: Optional[CrawlAnalytics] = None
        self._companies: List[CompanyRecord] = []
        self._scraped_count = 0
        self._write_lock = threading.Lock()

    @property
    def companies(self) -> List[CompanyRecord]:
        return list(self._companies)

    def load_catalog(self, records: Iterable[CompanyRecord]) -> None:
        """Replace the catalog and build the index from it."""
        with self._write_lock:
            companies = list(records)
            self.index_manager.rebuild(companies)
            self._companies = companies
        logger.info("Company service initialized successfully")

    def resolve(self, query: MatchQuery) -> Optional[MatchResult]:
        """
        Resolve a query to at most one catalog record.

        Raises:
            IndexNotReadyError: If the catalog has not been indexed yet.
        """
        index = self.index_manager.current()
        logger.debug(f"Searching for company with params: {query}")
        return matching_orchestrator(query, index, fallback_enabled=self.fallback_enabled)

    def fuse(self, crawl_records: Iterable[CrawledRecord]) -> None:
        """Fuse a complete crawl batch into the catalog and rebuild the index."""
        if not self.index_manager.is_ready:
            raise IndexNotReadyError("Service not initialized")
        crawl_records = list(crawl_records)
        with self._write_lock:
            fused = fuse_catalog(self._companies, crawl_records)
            self.index_manager.rebuild(fused)
            self._companies = fused
            self._scraped_count = len(crawl_records)

    async def crawl_and_fuse(self, domains: List[str]) -> CrawlAnalytics:
        """
        Crawl the given domains, fuse the results and rebuild the index.

        Args:
            domains (List[str]): Domains to crawl.

        Returns:
            CrawlAnalytics: Coverage statistics of the crawl batch.
        """
        if not self.index_manager.is_ready:
            raise IndexNotReadyError("Service not initialized")

        logger.info(f"Scraping {len(domains)} websites")
        batch = await scrape_websites(domains)
        analytics = compute_crawl_analytics(batch.records, batch.total_duration_ms)
        self.fuse(batch.records)
        self.analytics = analytics
        logger.info(
            f"Scraping completed: {analytics.successfully_crawled}/{analytics.total_websites} "
            f"crawled ({analytics.coverage_percentage:.1f}%) in {analytics.total_processing_time_ms}ms"
        )
        return analytics

    def stats(self) -> IndexStats:
        # both figures come from the published index snapshot
        return self.index_manager.stats()

    def bulk_resolve(self, queries: Iterable[MatchQuery]) -> BulkResolveReport:
        """Resolve every query and report the match rate."""
        results = [QueryOutcome(query=query, match=self.resolve(query)) for query in queries]
        matched = sum(1 for r in results if r.found)
        total = len(results)
        return BulkResolveReport(
            total=total,
            matched_count=matched,
            match_rate=(matched / total) * 100 if total else 0.0,
            results=results,
        )

    def status(self) -> Dict[str, Any]:
        index_stats = self.index_manager.stats()
        return {
            "initialized": index_stats.indexed,
            "companies_count": index_stats.total_companies,
            "scraped_data_count": self._scraped_count,
            "analytics_available": self.analytics is not None,
            "index_stats": index_stats,
        }

    def get_company_by_domain(self, domain: str) -> Optional[CompanyRecord]:
        for company in self._companies:
            if company.domain == domain:
                return company
        return None
