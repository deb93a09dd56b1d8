import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from bs4 import BeautifulSoup

from company_match.clients import FetchError
from company_match.crawler import (
    batch_iter,
    extract_address,
    extract_phone_numbers,
    extract_social_links,
    scrape_websites,
)

ACME_HTML = """
<html><body>
  <h1>Acme Inc</h1>
  <p>Call us at (555) 123-4567 or +1 555-987-6543.</p>
  <div class="footer-address">123 Main Street, Springfield, IL 62701</div>
  <a href="https://www.facebook.com/acme">Facebook</a>
  <a href="https://facebook.com/acme-duplicate">Facebook again</a>
  <a href="https://x.com/acme">X</a>
  <a href="https://www.linkedin.com/company/acme">LinkedIn</a>
  <a href="https://www.pinterest.com/acme">Pinterest</a>
  <a href="https://dropbox.com/s/brochure.pdf">Brochure</a>
  <a href="/contact">Contact</a>
</body></html>
"""


def test_extract_phone_numbers_dedups_by_number():
    text = "Call us at (555) 123-4567 or +1 555-987-6543. Fax 555.222.3333, ext 555-0000"

    assert extract_phone_numbers(text) == ["+1 555-987-6543", "(555) 123-4567", "555.222.3333"]


def test_extract_social_links_classifies_by_host():
    links = extract_social_links(BeautifulSoup(ACME_HTML, "html.parser"))

    assert links.facebook == "https://www.facebook.com/acme"
    assert links.twitter == "https://x.com/acme"
    assert links.linkedin == "https://www.linkedin.com/company/acme"
    assert links.instagram is None
    assert links.other == ["https://www.pinterest.com/acme"]


def test_extract_address_prefers_markup():
    soup = BeautifulSoup(ACME_HTML, "html.parser")

    assert extract_address(soup) == "123 Main Street, Springfield, IL 62701"


def test_extract_address_falls_back_to_body_text():
    soup = BeautifulSoup("<html><body><p>Visit us at 42 Harbor Road Suite 5, Portland 97201.</p></body></html>", "html.parser")

    assert extract_address(soup) == "42 Harbor Road Suite 5, Portland 97201"


def test_extract_address_none_when_absent():
    soup = BeautifulSoup("<html><body><p>Hello world</p></body></html>", "html.parser")

    assert extract_address(soup) is None


def test_batch_iter_fixed_width():
    batches = list(batch_iter(["a", "b", "c", "d", "e"], 2))

    assert batches == [(0, ["a", "b"]), (2, ["c", "d"]), (4, ["e"])]


@pytest.mark.asyncio
async def test_scrape_websites_collects_every_domain():
    """
    Crawl three domains in batches of two with a patched fetch client;
    one fetch fails and must surface as an unsuccessful record.
    """
    def fake_get_html(url):
        if "down.example" in url:
            raise FetchError("HTTP 503 for https://down.example")
        return ACME_HTML

    with patch("company_match.crawler.WebClient") as mock_web_client:
        mock_instance = MagicMock()
        mock_instance.get_html = AsyncMock(side_effect=fake_get_html)
        mock_instance.close = AsyncMock()
        mock_web_client.return_value = mock_instance

        batch = await scrape_websites(["acme.com", "down.example", "http://acme.org"], batch_size=2)

    assert [r.domain for r in batch.records] == ["acme.com", "down.example", "http://acme.org"]
    assert [r.success for r in batch.records] == [True, False, True]

    acme = batch.records[0]
    assert acme.phone_numbers == ["+1 555-987-6543", "(555) 123-4567"]
    assert acme.social_links.facebook == "https://www.facebook.com/acme"
    assert acme.address == "123 Main Street, Springfield, IL 62701"

    failed = batch.records[1]
    assert "503" in failed.error
    assert failed.phone_numbers == []

    urls = [c.args[0] for c in mock_instance.get_html.await_args_list]
    assert sorted(urls) == ["http://acme.org", "https://acme.com", "https://down.example"]
    mock_instance.close.assert_awaited_once()
    assert batch.total_duration_ms >= 0
