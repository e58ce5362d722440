"""Outbound link risk check for a fetched page."""

import ipaddress
import logging
from urllib.parse import parse_qsl, urljoin, urlsplit

import httpx
from bs4 import BeautifulSoup

from credcheck.config import constants as c
from credcheck.config.constants import RiskLabel
from credcheck.config.settings import Settings
from credcheck.infrastructure.http.client import create_probe_client
from credcheck.services.links.models import LinkRisk, OutboundLinksReport
from credcheck.services.links.policy import host_matches

logger = logging.getLogger(__name__)

_REASONS: dict[str, dict[str, str]] = {
    "en": {
        "url_shortener": "URL shortener detected - destination hidden",
        "suspicious_tld": "Uses high-risk TLD commonly abused",
        "punycode": "Internationalized domain (potential lookalike)",
        "suspicious_keywords": "Contains suspicious keywords in URL",
        "excessive_tracking": "Multiple tracking parameters",
        "long_query": "Unusually long query string",
        "many_subdomains": "Many subdomains (potential obfuscation)",
        "long_domain": "Unusually long domain name",
        "https": "Uses HTTPS encryption",
        "well_known": "Well-known domain",
        "no_signals": "No risk signals detected",
        "invalid_url": "Invalid URL",
        "fetch_failed": "Unable to fetch page",
        "pro_unavailable": "Reputation check unavailable. Showing heuristic results only.",
    },
    "fr": {
        "url_shortener": "Raccourcisseur d'URL - destination masquée",
        "suspicious_tld": "Extension à haut risque souvent abusée",
        "punycode": "Domaine internationalisé (potentiel sosie)",
        "suspicious_keywords": "Contient des mots-clés suspects dans l'URL",
        "excessive_tracking": "Multiples paramètres de suivi",
        "long_query": "Chaîne de requête anormalement longue",
        "many_subdomains": "Nombreux sous-domaines (possible obscurcissement)",
        "long_domain": "Nom de domaine anormalement long",
        "https": "Utilise le chiffrement HTTPS",
        "well_known": "Domaine bien connu",
        "no_signals": "Aucun signal de risque détecté",
        "invalid_url": "URL invalide",
        "fetch_failed": "Impossible de récupérer la page",
        "pro_unavailable": (
            "Vérification de réputation non disponible. "
            "Affichage des résultats heuristiques uniquement."
        ),
    },
}


class InvalidTargetError(ValueError):
    """The page URL is not http(s) or points at a private host."""


def messages(language: str | None) -> dict[str, str]:
    """Localized reason strings (English unless French is requested)."""
    return _REASONS["fr"] if language == "fr" else _REASONS["en"]


def is_blocked_host(hostname: str | None) -> bool:
    """True for localhost and loopback, private, link-local or unspecified addresses."""
    if not hostname:
        return True
    host = hostname.strip("[]").lower()
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    return (
        address.is_private
        or address.is_loopback
        or address.is_link_local
        or address.is_unspecified
        or address.is_reserved
    )


def normalize_link(href: str, base_url: str) -> str | None:
    """Resolve ``href`` against ``base_url``; None unless it is a public http(s) URL."""
    try:
        absolute = urljoin(base_url, href.strip())
        parts = urlsplit(absolute)
    except ValueError:
        return None
    if parts.scheme not in ("http", "https"):
        return None
    if is_blocked_host(parts.hostname):
        return None
    return absolute


def _hostname(url: str) -> str:
    try:
        return urlsplit(url).hostname or url
    except ValueError:
        return url


def extract_links(html: str, source_url: str, max_links: int) -> list[str]:
    """
    Collect external links from a page, one per domain.

    Same-host links, non-http(s) schemes and private hosts are dropped.
    Document order is preserved.
    """
    source_host = _hostname(source_url)
    soup = BeautifulSoup(html, "html.parser")

    unique: list[str] = []
    seen: set[str] = set()
    for anchor in soup.find_all("a", href=True):
        link = normalize_link(str(anchor["href"]), source_url)
        if not link or _hostname(link) == source_host or link in seen:
            continue
        seen.add(link)
        unique.append(link)

    by_domain: dict[str, str] = {}
    for link in unique:
        by_domain.setdefault(_hostname(link), link)
        if len(by_domain) >= max_links:
            break
    return list(by_domain.values())


def risk_label(score: int, settings: Settings) -> RiskLabel:
    """Map a clamped risk score to its label using the configured thresholds."""
    if score >= settings.risk_suspicious_threshold:
        return RiskLabel.SUSPICIOUS
    if score >= settings.risk_unknown_threshold:
        return RiskLabel.UNKNOWN
    return RiskLabel.SAFE


def analyze_link(url: str, language: str, settings: Settings) -> LinkRisk:
    """Score one link with URL-only heuristics (no network access)."""
    t = messages(language)
    reasons: list[str] = []
    score = 0

    domain = _hostname(url)
    lower_domain = domain.lower()
    lower_url = url.lower()

    if host_matches(lower_domain, c.URL_SHORTENERS):
        reasons.append(t["url_shortener"])
        score += c.RISK_SHORTENER

    if lower_domain.endswith(c.SUSPICIOUS_TLDS):
        reasons.append(t["suspicious_tld"])
        score += c.RISK_SUSPICIOUS_TLD

    if "xn--" in lower_domain or not domain.isascii():
        reasons.append(t["punycode"])
        score += c.RISK_PUNYCODE

    searchable = lower_url.replace("?", "", 1)
    keyword_hits = [kw for kw in c.SUSPICIOUS_KEYWORDS if kw in searchable]
    if len(keyword_hits) >= 2:
        reasons.append(t["suspicious_keywords"])
        score += c.RISK_KEYWORDS_MANY
    elif len(keyword_hits) == 1:
        score += c.RISK_KEYWORD_SINGLE

    try:
        query = urlsplit(url).query
    except ValueError:
        query = ""
    if query:
        param_names = {name for name, _ in parse_qsl(query, keep_blank_values=True)}
        if len(param_names & c.TRACKING_PARAMS) >= c.MIN_TRACKING_PARAMS:
            reasons.append(t["excessive_tracking"])
            score += c.RISK_TRACKING
        # "?" counts towards the length.
        if len(query) + 1 > c.LONG_QUERY_LENGTH:
            reasons.append(t["long_query"])
            score += c.RISK_LONG_QUERY

    if len(domain.split(".")) - 2 >= c.MIN_EXTRA_SUBDOMAINS:
        reasons.append(t["many_subdomains"])
        score += c.RISK_SUBDOMAINS

    if len(domain) > c.LONG_DOMAIN_LENGTH:
        reasons.append(t["long_domain"])
        score += c.RISK_LONG_DOMAIN

    if url.startswith("https://"):
        if not reasons:
            reasons.append(t["https"])
        score -= c.RISK_HTTPS_BONUS

    if host_matches(lower_domain, c.WELL_KNOWN_DOMAINS):
        if not reasons:
            reasons.append(t["well_known"])
        score -= c.RISK_WELL_KNOWN_BONUS

    score = max(0, min(100, score))
    final_reasons = reasons[: settings.outbound_max_reasons] or [t["no_signals"]]

    return LinkRisk(
        url=url,
        domain=domain,
        label=risk_label(score, settings).value,
        reasons=final_reasons,
        risk_score=score,
    )


def validate_target(url: str) -> str:
    """
    Validate the page URL before fetching it.

    Raises:
        InvalidTargetError: If the URL is not http(s) or targets a private host
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidTargetError(str(e)) from e
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise InvalidTargetError("Invalid protocol")
    if is_blocked_host(parts.hostname):
        raise InvalidTargetError("Blocked host")
    return url


class OutboundLinkChecker:
    """Fetches a page and rates the risk of every external link it contains."""

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize outbound link checker."""
        self.settings = settings
        self._transport = transport

    async def check(
        self,
        url: str,
        language: str = "en",
        analysis_type: str = "standard",
    ) -> OutboundLinksReport:
        """
        Run the outbound link check for ``url``.

        Raises:
            InvalidTargetError: If the URL fails validation (callers answer 400)
        """
        validate_target(url)
        t = messages(language)

        logger.info("Fetching outbound links from: %s", url)
        try:
            html = await self._fetch_html(url)
        except Exception as e:
            logger.warning("Fetch error for %s: %s", url, e)
            return OutboundLinksReport(success=False, error=t["fetch_failed"])

        links = extract_links(html, url, self.settings.outbound_max_links)
        analyzed = [analyze_link(link, language, self.settings) for link in links]
        analyzed.sort(key=lambda item: item.risk_score, reverse=True)

        is_pro = analysis_type == "pro"
        report = OutboundLinksReport(
            success=True,
            links=analyzed,
            total_found=len(links),
            analyzed=len(analyzed),
            pro_available=is_pro,
            pro_message=t["pro_unavailable"] if is_pro else None,
        )
        logger.info(
            "Found %d outbound links, analyzed %d", report.total_found, report.analyzed
        )
        return report

    async def _fetch_html(self, url: str) -> str:
        """
        GET the page, enforcing status, declared size and read size limits.

        Redirects are followed one hop at a time and every ``Location`` goes
        through ``validate_target`` before it is requested.
        """
        limit = self.settings.outbound_max_bytes
        headers = {"User-Agent": c.OUTBOUND_USER_AGENT, "Accept": "text/html"}
        async with create_probe_client(
            self.settings.outbound_fetch_timeout,
            transport=self._transport,
            headers=headers,
            follow_redirects=False,
        ) as client:
            current = url
            for _ in range(c.OUTBOUND_MAX_REDIRECTS + 1):
                async with client.stream("GET", current) as response:
                    if response.is_redirect:
                        location = response.headers["location"]
                        current = validate_target(urljoin(str(response.url), location))
                        logger.debug("Following redirect to %s", current)
                        continue

                    if not response.is_success:
                        raise httpx.HTTPStatusError(
                            f"HTTP {response.status_code}",
                            request=response.request,
                            response=response,
                        )

                    declared = response.headers.get("content-length")
                    if declared and declared.isdigit() and int(declared) > limit:
                        raise ValueError("Response too large")

                    body = bytearray()
                    async for chunk in response.aiter_bytes():
                        body.extend(chunk)
                        if len(body) >= limit:
                            break
                    encoding = response.encoding or "utf-8"
                    return bytes(body[:limit]).decode(encoding, errors="replace")

        raise ValueError(f"More than {c.OUTBOUND_MAX_REDIRECTS} redirects")
