"""
Canonical forms for the identifiers used in matching.

Two values refer to the same identity iff their normalized forms are equal.
Every function here is pure and idempotent.
"""
import re
from typing import Optional

_SCHEME_RE = re.compile(r"^https?://")
_WWW_RE = re.compile(r"^www\.")
_NON_DIGIT_RE = re.compile(r"\D")
_PUNCT_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")

SOCIAL_PREFIXES = {
    "facebook": ("facebook.com/", "fb.com/", "m.facebook.com/"),
    "twitter": ("twitter.com/", "x.com/"),
    "linkedin": ("linkedin.com/",),
    "instagram": ("instagram.com/",),
    "youtube": ("youtube.com/",),
}


def _strip_url(value: str) -> str:
    s = value.strip().lower()
    s = _SCHEME_RE.sub("", s)
    s = _WWW_RE.sub("", s)
    return s.rstrip("/")


def normalize_domain(domain: Optional[str]) -> str:
    """Lower-case and strip scheme, `www.` and trailing slash: `HTTPS://WWW.Foo.com/` -> `foo.com`."""
    if not domain:
        return ""
    return _strip_url(domain)


def normalize_phone(phone: Optional[str]) -> str:
    """
    Keep digits only and drop a North-American `1` country code.

    The `1` is only treated as a country code on 11-digit numbers, so the
    result never loses a digit on a second pass. Shorter numbers keep a
    leading `1`: `1-555-0000` normalizes to `15550000` and does not equal
    `555-0000`. Stripping it unconditionally would make `11234567890` lose
    a digit each time it is normalized.
    """
    if not phone:
        return ""
    digits = _NON_DIGIT_RE.sub("", phone)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    return digits


def normalize_social_handle(platform: str, url: Optional[str]) -> str:
    """Reduce a profile URL to its handle, e.g. `https://www.facebook.com/Acme/` -> `acme`."""
    if not url:
        return ""
    s = _strip_url(url)
    for prefix in SOCIAL_PREFIXES.get(platform, ()):
        if s.startswith(prefix):
            s = s[len(prefix):]
            break
    return s.rstrip("/")


def normalize_name(name: Optional[str]) -> str:
    """Lower-case, drop punctuation and collapse whitespace."""
    if not name:
        return ""
    s = _PUNCT_RE.sub("", name.lower())
    return _WHITESPACE_RE.sub(" ", s).strip()
