import pytest

from company_match.models import CompanyRecord, SocialLinks


@pytest.fixture
def catalog():
    """Small reference catalog shared by the matching and service tests."""
    return [
        CompanyRecord(domain="acme.com", commercial_name="Acme Inc"),
        CompanyRecord(
            domain="widgets.io",
            commercial_name="Widget Works",
            legal_name="Widget Works LLC",
            phone_numbers=["555-123-4567"],
        ),
        CompanyRecord(
            domain="globex.com",
            commercial_name="Globex Corporation",
            social_links=SocialLinks(facebook="https://facebook.com/globexcorp"),
        ),
    ]
