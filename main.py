import os
import asyncio
import csv
import sys
from loguru import logger

from company_match.config import (
    CATALOG_CSV,
    LOG_LEVEL,
    OUTPUT_CSV,
    QUERY_SAMPLE_CSV,
    WEBSITES_CSV,
)
from company_match.loaders import load_catalog, load_query_sample, load_websites
from company_match.service import CompanyService


async def main():
    """
    Orchestrate the full batch pipeline.

    - Loads the company catalog and builds the search index.
    - Crawls the website list, fuses the scraped data and rebuilds the index.
    - Resolves the sample queries and writes one result row per query to the output CSV.
    """
    # Initialize logs
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    service = CompanyService()
    service.load_catalog(load_catalog(CATALOG_CSV))

    if os.path.exists(WEBSITES_CSV):
        analytics = await service.crawl_and_fuse(load_websites(WEBSITES_CSV))
        logger.info(
            f"Fill rates: phones {analytics.fill_rates.phone_numbers:.1f}%, "
            f"social {analytics.fill_rates.social_media:.1f}%, "
            f"address {analytics.fill_rates.address:.1f}%"
        )
    else:
        logger.warning(f"No website list at {WEBSITES_CSV}; skipping crawl")

    report = service.bulk_resolve(load_query_sample(QUERY_SAMPLE_CSV))
    logger.info(f"Matched {report.matched_count}/{report.total} queries ({report.match_rate:.1f}%)")

    with open(OUTPUT_CSV, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["name", "website", "phone", "facebook", "domain", "score", "confidence", "matched_fields"])
        for outcome in report.results:
            q, m = outcome.query, outcome.match
            writer.writerow([
                q.name or "",
                q.website or "",
                q.phone or "",
                q.facebook or "",
                m.company.domain if m else "",
                f"{m.score:.3f}" if m else "",
                m.confidence.value if m else "",
                ";".join(m.matched_fields) if m else "",
            ])


if __name__ == "__main__":
    asyncio.run(main())
