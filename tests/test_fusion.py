from company_match.fusion import (
    dedup_ordered,
    fuse_catalog,
    merge_social_links,
    prefer_existing,
    union_values,
)
from company_match.fuzzy_index import FuzzyIndex
from company_match.matchers import matching_orchestrator
from company_match.models import CompanyRecord, CrawledRecord, MatchQuery, SocialLinks


def test_scalar_prefers_existing_value():
    assert prefer_existing("1 Main St", "2 Side St") == "1 Main St"
    assert prefer_existing(None, "2 Side St") == "2 Side St"
    assert prefer_existing("", "2 Side St") == "2 Side St"
    assert prefer_existing(None, None) is None


def test_phone_union_is_commutative_and_duplicate_free():
    a = ["555-0000", "555-1111"]
    b = ["555-1111", "555-2222"]

    assert set(union_values(a, b)) == set(union_values(b, a)) == {"555-0000", "555-1111", "555-2222"}
    assert len(union_values(a, b)) == 3


def test_other_links_keep_first_seen_order():
    existing = ["https://pinterest.com/acme", "https://tiktok.com/@acme"]
    scraped = ["https://tiktok.com/@acme", "https://reddit.com/r/acme", "https://Pinterest.com/acme"]

    assert dedup_ordered(existing, scraped) == [
        "https://pinterest.com/acme",
        "https://tiktok.com/@acme",
        "https://reddit.com/r/acme",
        "https://Pinterest.com/acme",
    ]


def test_social_links_first_non_null_wins_per_platform():
    existing = SocialLinks(facebook="https://facebook.com/acme", other=["https://reddit.com/r/acme"])
    scraped = SocialLinks(
        facebook="https://facebook.com/acme-other",
        linkedin="https://linkedin.com/company/acme",
        other=["https://reddit.com/r/acme"],
    )

    merged = merge_social_links(existing, scraped)

    assert merged.facebook == "https://facebook.com/acme"
    assert merged.linkedin == "https://linkedin.com/company/acme"
    assert merged.twitter is None
    assert merged.other == ["https://reddit.com/r/acme"]


def test_successful_crawl_fills_record_and_becomes_searchable_after_rebuild():
    catalog = [CompanyRecord(domain="acme.com", commercial_name="Acme Inc")]
    batch = [CrawledRecord(domain="acme.com", success=True, phone_numbers=["555-0000"])]

    assert matching_orchestrator(MatchQuery(phone="555-0000"), FuzzyIndex(catalog)) is None

    fused = fuse_catalog(catalog, batch)

    assert set(fused[0].phone_numbers) == {"555-0000"}
    result = matching_orchestrator(MatchQuery(phone="555-0000"), FuzzyIndex(fused))
    assert result.company.domain == "acme.com"
    assert result.score == 0.95


def test_fusing_same_batch_twice_is_idempotent():
    catalog = [
        CompanyRecord(
            domain="acme.com",
            phone_numbers=["555-1111"],
            social_links=SocialLinks(other=["https://tiktok.com/@acme"]),
        )
    ]
    batch = [
        CrawledRecord(
            domain="acme.com",
            success=True,
            phone_numbers=["555-0000", "555-1111"],
            social_links=SocialLinks(twitter="https://x.com/acme", other=["https://tiktok.com/@acme"]),
            address="1 Main Street, Springfield 12345",
        )
    ]

    once = fuse_catalog(catalog, batch)
    twice = fuse_catalog(once, batch)

    assert once == twice
    assert set(twice[0].phone_numbers) == {"555-0000", "555-1111"}


def test_failed_crawls_and_unknown_domains_leave_catalog_unchanged():
    catalog = [CompanyRecord(domain="acme.com"), CompanyRecord(domain="globex.com")]
    batch = [
        CrawledRecord(domain="acme.com", success=False, phone_numbers=["555-0000"], error="timeout"),
        CrawledRecord(domain="unknown.org", success=True, phone_numbers=["555-9999"]),
    ]

    fused = fuse_catalog(catalog, batch)

    assert [r.domain for r in fused] == ["acme.com", "globex.com"]
    assert fused == catalog


def test_address_and_location_keep_existing():
    catalog = [CompanyRecord(domain="acme.com", address="1 Main St")]
    batch = [CrawledRecord(domain="acme.com", success=True, address="9 Other Rd", location="Springfield")]

    fused = fuse_catalog(catalog, batch)

    assert fused[0].address == "1 Main St"
    assert fused[0].location == "Springfield"


def test_fusion_does_not_mutate_previous_snapshot():
    original = CompanyRecord(domain="acme.com")
    batch = [CrawledRecord(domain="acme.com", success=True, phone_numbers=["555-0000"])]

    fused = fuse_catalog([original], batch)

    assert original.phone_numbers == []
    assert fused[0] is not original
