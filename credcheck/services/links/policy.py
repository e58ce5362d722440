"""
Link classification policy.

Pure functions over the static lookup sets in ``config.constants`` so the
policy can be tested without any network access.
"""

import re

import httpx

from credcheck.config.constants import (
    DEAD_LINK_STATUSES,
    GENERIC_PATHS,
    KEY_TERM_MIN_LENGTH,
    SHORT_SEGMENT_MAX_LENGTH,
    TRUSTED_DOMAINS,
    TRUSTED_SUFFIXES,
)

_NON_TERM_CHARS = re.compile(r"[^a-zA-ZÀ-ÿ0-9]")


def host_matches(hostname: str, domains: frozenset[str]) -> bool:
    """True when ``hostname`` equals one of ``domains`` or is a subdomain of one."""
    host = hostname.lower().rstrip(".")
    return any(host == domain or host.endswith(f".{domain}") for domain in domains)


def is_trusted_host(hostname: str) -> bool:
    """High-authority host whose 403 answers are treated as anti-bot, not dead."""
    host = hostname.lower().rstrip(".")
    if not host:
        return False
    return host_matches(host, TRUSTED_DOMAINS) or host.endswith(TRUSTED_SUFFIXES)


def is_generic_path(pathname: str) -> bool:
    """True for home, index, search and error pages, and for near-empty paths."""
    normalized = pathname.lower()
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    normalized = normalized or "/"
    if normalized in GENERIC_PATHS:
        return True

    segments = [segment for segment in normalized.split("/") if segment]
    if not segments:
        return True
    if len(segments) == 1 and len(segments[0]) <= SHORT_SEGMENT_MAX_LENGTH:
        return True

    return False


def extract_key_terms(text: str | None) -> list[str]:
    """Lowercased alphanumeric words (accented Latin included) longer than four characters."""
    if not text:
        return []
    terms = []
    for word in text.lower().split():
        term = _NON_TERM_CHARS.sub("", word)
        if len(term) >= KEY_TERM_MIN_LENGTH:
            terms.append(term)
    return terms


def has_keyword_overlap(snippet: str | None, url: str) -> bool:
    """True when any key term of ``snippet`` appears in ``url``."""
    url_lower = url.lower()
    return any(term in url_lower for term in extract_key_terms(snippet))


def status_rejection(status: int, hostname: str) -> str | None:
    """
    Reason a response status makes the link invalid, or None if acceptable.

    404, 410, 429 and 5xx are always dead. Otherwise 2xx and 3xx pass, and
    so does 403 from a trusted host.
    """
    if status in DEAD_LINK_STATUSES or status >= 500:
        return f"HTTP {status}"

    acceptable = 200 <= status < 400 or (status == 403 and is_trusted_host(hostname))
    if not acceptable:
        return f"HTTP {status}"
    return None


def encoded_path(url: httpx.URL) -> str:
    """Percent-encoded path of ``url``, without the query string."""
    return url.raw_path.decode("ascii").split("?", 1)[0] or "/"


def destination_key(final_url: str) -> str | None:
    """Lowercased ``hostname + pathname`` of a URL, or None if it does not parse."""
    try:
        parsed = httpx.URL(final_url)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if not parsed.host:
        return None
    return f"{parsed.host}{encoded_path(parsed)}".lower()
