import pytest

from company_match.normalization import (
    normalize_domain,
    normalize_name,
    normalize_phone,
    normalize_social_handle,
)


def test_domain_is_case_scheme_and_www_insensitive():
    assert normalize_domain("HTTPS://WWW.Foo.com/") == normalize_domain("foo.com") == "foo.com"
    assert normalize_domain("http://acme.com") == "acme.com"
    assert normalize_domain("  www.Acme.com/ ") == "acme.com"


def test_phone_keeps_digits_and_drops_country_code():
    assert normalize_phone("(555) 123-4567") == "5551234567"
    assert normalize_phone("+1 555.123.4567") == "5551234567"
    assert normalize_phone("555-0000") == "5550000"
    # only an 11-digit number carries a country code
    assert normalize_phone("123-4567") == "1234567"
    assert normalize_phone("1-555-0000") == "15550000"
    assert normalize_phone("1-555-0000") != normalize_phone("555-0000")


def test_facebook_handle_strips_known_prefixes():
    assert normalize_social_handle("facebook", "https://www.facebook.com/AcmeInc/") == "acmeinc"
    assert normalize_social_handle("facebook", "fb.com/acmeinc") == "acmeinc"
    assert normalize_social_handle("facebook", "https://m.facebook.com/acmeinc") == "acmeinc"
    assert normalize_social_handle("twitter", "https://x.com/acme") == "acme"


def test_name_drops_punctuation_and_collapses_whitespace():
    assert normalize_name("  Acme,   Inc. ") == "acme inc"
    assert normalize_name("O'Brien & Sons") == "obrien sons"


def test_missing_values_normalize_to_empty_string():
    assert normalize_domain(None) == ""
    assert normalize_phone("") == ""
    assert normalize_social_handle("facebook", None) == ""
    assert normalize_name(None) == ""


@pytest.mark.parametrize(
    "func, value",
    [
        (normalize_domain, "HTTPS://WWW.Foo.com/"),
        (normalize_domain, "http://www.acme.com//"),
        (normalize_phone, "+1 (555) 123-4567"),
        (normalize_phone, "1-555-123-4567"),
        (normalize_phone, "11234567890"),
        (normalize_name, " The  Acme, Company! "),
        (lambda v: normalize_social_handle("facebook", v), "https://www.facebook.com/Acme/"),
    ],
)
def test_normalization_is_idempotent(func, value):
    once = func(value)
    assert func(once) == once
