import asyncio
import re
import time
from typing import Iterator, List, Optional, Tuple
from urllib.parse import urlparse
from bs4 import BeautifulSoup
from loguru import logger

from company_match.clients import WebClient
from company_match.config import BATCH_SIZE
from company_match.models import CrawlBatch, CrawledRecord, SocialLinks
from company_match.normalization import normalize_phone

# Country-code form first so "+1 555 ..." wins over its unprefixed tail
PHONE_PATTERNS = [
    re.compile(r"(?<!\d)\+?1[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
    re.compile(r"(?<!\d)\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)"),
    re.compile(r"(?<!\d)\d{3}[-.\s]\d{3}[-.\s]\d{4}(?!\d)"),
]

SOCIAL_HOSTS = {
    "facebook": ("facebook.com", "fb.com"),
    "twitter": ("twitter.com", "x.com"),
    "linkedin": ("linkedin.com",),
    "instagram": ("instagram.com",),
    "youtube": ("youtube.com", "youtu.be"),
}
OTHER_SOCIAL_HOSTS = (
    "pinterest.com",
    "snapchat.com",
    "tiktok.com",
    "discord.com",
    "reddit.com",
    "tumblr.com",
    "telegram.org",
)

ADDRESS_SELECTORS = [
    '[itemtype*="PostalAddress"]',
    ".address",
    ".location",
    ".contact-address",
    '[class*="address"]',
    '[class*="location"]',
]
ADDRESS_KEYWORDS = ("street", "st", "avenue", "ave", "road", "rd", "boulevard", "blvd", "drive", "dr", "suite", "apt")
ADDRESS_PATTERN = re.compile(
    r"\d+\s+[A-Za-z\s]+(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|Plaza|Circle|Cir)[^.]*?\d{5}"
)


def extract_phone_numbers(text: str) -> List[str]:
    """
    Find phone numbers in page text.

    Args:
        text (str): Visible page text.

    Returns:
        List[str]: Raw phone strings as written on the page, one per distinct number.
    """
    seen = set()
    phones = []
    for pattern in PHONE_PATTERNS:
        for match in pattern.findall(text):
            digits = normalize_phone(match)
            if len(digits) < 10 or digits in seen:
                continue
            seen.add(digits)
            phones.append(match.strip())
    return phones


def _host_matches(host: str, domains: Tuple[str, ...]) -> bool:
    return any(host == d or host.endswith("." + d) for d in domains)


def extract_social_links(soup: BeautifulSoup) -> SocialLinks:
    """Classify every anchor pointing to a social network; first link per platform wins."""
    links = SocialLinks()
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        host = urlparse(href).netloc.lower()
        if not host:
            continue
        if host.startswith("www."):
            host = host[4:]

        for platform, hosts in SOCIAL_HOSTS.items():
            if _host_matches(host, hosts):
                if not getattr(links, platform):
                    setattr(links, platform, href)
                break
        else:
            if _host_matches(host, OTHER_SOCIAL_HOSTS) and href not in links.other:
                links.other.append(href)
    return links


def _looks_like_address(text: str) -> bool:
    lowered = text.lower()
    has_keyword = any(keyword in lowered for keyword in ADDRESS_KEYWORDS)
    return has_keyword and any(ch.isdigit() for ch in text)


def extract_address(soup: BeautifulSoup) -> Optional[str]:
    """Best-effort postal address: structured markup first, then a street pattern in the body text."""
    for selector in ADDRESS_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = " ".join(element.get_text(" ").split())
        if len(text) > 10 and _looks_like_address(text):
            return text

    body = soup.body or soup
    match = ADDRESS_PATTERN.search(body.get_text(" "))
    return " ".join(match.group(0).split()) if match else None


async def scrape_single_website(web_client: WebClient, domain: str) -> CrawledRecord:
    """
    Crawl the home page of one domain.

    Args:
        web_client (WebClient): The page-fetch client singleton instance.
        domain (str): Domain (or URL) to crawl.

    Returns:
        CrawledRecord: Extracted attributes; `success` is False and `error` set on failure.
    """
    start = time.perf_counter()
    result = CrawledRecord(domain=domain)
    url = domain if domain.startswith("http") else f"https://{domain}"

    try:
        html = await web_client.get_html(url)
        soup = BeautifulSoup(html, "html.parser")
        result.phone_numbers = extract_phone_numbers(soup.get_text(" "))
        result.social_links = extract_social_links(soup)
        result.address = extract_address(soup)
        result.success = True
    except asyncio.TimeoutError:
        result.error = "Timed out"
        logger.warning(f"⏱️ Timed out scraping {domain}")
    except Exception as e:
        result.error = str(e) or type(e).__name__
        logger.warning(f"Failed to scrape {domain}: {result.error}")

    result.duration_ms = int((time.perf_counter() - start) * 1000)
    return result


def batch_iter(domains: List[str], batch_size: int) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield start index and domain slices of size `batch_size` for batched processing.
    """
    n = len(domains)
    for i in range(0, n, batch_size):
        yield i, domains[i:i + batch_size]


async def scrape_websites(domains: List[str], batch_size: int = BATCH_SIZE) -> CrawlBatch:
    """
    Crawl all domains in fixed-width parallel batches.

    Args:
        domains (List[str]): Domains to crawl.
        batch_size (int): Number of pages fetched concurrently.

    Returns:
        CrawlBatch: One record per domain, in input order, plus total wall-clock time.
    """
    start = time.perf_counter()
    web_client = WebClient()
    results: List[CrawledRecord] = []

    try:
        for start_idx, batch in batch_iter(domains, batch_size):
            batch_results = await asyncio.gather(
                *[scrape_single_website(web_client, domain) for domain in batch]
            )
            results.extend(batch_results)
            logger.info(f"Processed {min(start_idx + batch_size, len(domains))}/{len(domains)} websites")
    finally:
        await web_client.close()

    total_ms = int((time.perf_counter() - start) * 1000)
    return CrawlBatch(records=results, total_duration_ms=total_ms)
