"""
Constants, enums, and static values.
"""

from enum import Enum


class Stance(str, Enum):
    """Relationship of a source to the analyzed claim."""

    CORROBORATING = "corroborating"
    CONTRADICTING = "contradicting"
    NEUTRAL = "neutral"


class TrustTier(str, Enum):
    """Coarse authority ranking inferred from a source's domain."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskLabel(str, Enum):
    """Outbound link risk label."""

    SAFE = "Safe"
    UNKNOWN = "Unknown"
    SUSPICIOUS = "Suspicious"


class InvalidReason(str, Enum):
    """Fixed reasons attached to rejected verification results."""

    GENERIC_PAGE = "Redirected to generic page"
    DUPLICATE = "Duplicate"
    NETWORK_ERROR = "Network error"


# ==========================================
#  LINK VERIFICATION POLICY
# ==========================================

# Many hosts reject requests that do not look like a browser.
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}

# HEAD answered with these statuses is retried once with GET.
HEAD_REJECTED_STATUSES: frozenset[int] = frozenset({403, 405})

# Statuses that always mean the link is dead or unusable.
DEAD_LINK_STATUSES: frozenset[int] = frozenset({404, 410, 429})

# 403 from these hosts is anti-bot protection on a page that exists.
TRUSTED_DOMAINS: frozenset[str] = frozenset({
    "britannica.com",
    "wikipedia.org",
    "nature.com",
    "sciencedirect.com",
    "ncbi.nlm.nih.gov",
    "pubmed.gov",
    "cdc.gov",
    "who.int",
    "nih.gov",
    "nasa.gov",
    "bbc.com",
    "nytimes.com",
    "reuters.com",
    "apnews.com",
})

TRUSTED_SUFFIXES: tuple[str, ...] = (".gov", ".edu")

# Landing, search and error paths (lowercased, no trailing slash).
GENERIC_PATHS: frozenset[str] = frozenset({
    "/",
    "/home",
    "/index",
    "/news",
    "/about",
    "/contact",
    "/search",
    "/404",
    "/error",
    "/not-found",
})

# A single path segment this short is treated as generic (/a, /fr, /en).
SHORT_SEGMENT_MAX_LENGTH = 3

# Minimum length of a snippet word counted as a key term.
KEY_TERM_MIN_LENGTH = 5


# ==========================================
#  OUTBOUND LINK RISK HEURISTICS
# ==========================================

OUTBOUND_USER_AGENT = "Credcheck/1.0 (+link-risk-check)"

# Redirect hops followed when fetching a page; each hop is checked for private hosts.
OUTBOUND_MAX_REDIRECTS = 5

URL_SHORTENERS: frozenset[str] = frozenset({
    "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly", "short.io",
    "is.gd", "v.gd", "buff.ly", "ift.tt", "j.mp", "rb.gy", "cutt.ly",
    "shorturl.at", "tiny.cc", "shorte.st", "adf.ly", "bc.vc", "po.st",
    "mcaf.ee", "su.pr", "lnkd.in", "db.tt", "qr.ae", "rebrand.ly",
    "bl.ink", "soo.gd", "clck.ru", "s.id", "rotf.lol", "shortlink.de",
})

SUSPICIOUS_TLDS: tuple[str, ...] = (
    ".top", ".xyz", ".click", ".live", ".work", ".date", ".download",
    ".stream", ".gdn", ".loan", ".racing", ".review", ".trade", ".win",
    ".bid", ".accountant", ".science", ".party", ".cricket", ".faith",
    ".men", ".cf", ".ga", ".gq", ".ml", ".tk", ".zip", ".mov", ".icu",
    ".cam", ".monster", ".rest", ".hair", ".quest", ".uno", ".sbs",
)

SUSPICIOUS_KEYWORDS: tuple[str, ...] = (
    "login", "verify", "account", "wallet", "claim", "giveaway", "bonus",
    "free", "password", "seed", "recovery", "support", "urgent", "confirm",
    "secure", "update", "suspended", "limited", "expire", "validate",
    "authenticate", "unlock", "restore", "reward", "winner", "prize",
    "jackpot", "crypto", "airdrop", "mint", "nft", "token", "binance",
    "metamask", "coinbase", "ledger", "trezor", "paypal", "bank",
)

TRACKING_PARAMS: frozenset[str] = frozenset({
    "gclid", "fbclid", "utm_source", "utm_medium", "utm_campaign",
    "utm_term", "utm_content", "mc_eid", "mc_cid", "msclkid", "_ga",
    "ref", "affiliate", "aff_id", "partner", "source", "campaign_id",
})

WELL_KNOWN_DOMAINS: frozenset[str] = frozenset({
    "google.com", "youtube.com", "facebook.com", "twitter.com", "x.com",
    "instagram.com", "linkedin.com", "github.com", "wikipedia.org",
    "amazon.com", "apple.com", "microsoft.com", "bbc.com", "cnn.com",
    "nytimes.com", "reuters.com", "theguardian.com", "lemonde.fr",
    "lefigaro.fr", "liberation.fr", "gov.uk", "gouv.fr", "europa.eu",
})

# Risk score contributions.
RISK_SHORTENER = 25
RISK_SUSPICIOUS_TLD = 20
RISK_PUNYCODE = 15
RISK_KEYWORDS_MANY = 20
RISK_KEYWORD_SINGLE = 8
RISK_TRACKING = 10
RISK_LONG_QUERY = 10
RISK_SUBDOMAINS = 15
RISK_LONG_DOMAIN = 10
RISK_HTTPS_BONUS = 5
RISK_WELL_KNOWN_BONUS = 20

LONG_QUERY_LENGTH = 200
LONG_DOMAIN_LENGTH = 50
MIN_TRACKING_PARAMS = 3
MIN_EXTRA_SUBDOMAINS = 3


# ==========================================
#  TRANSLATION
# ==========================================

DEFAULT_LANGUAGE_NAME = "ENGLISH"

LANGUAGE_NAMES: dict[str, str] = {
    "en": "ENGLISH",
    "fr": "FRENCH",
    "es": "SPANISH",
    "de": "GERMAN",
    "pt": "PORTUGUESE",
    "it": "ITALIAN",
    "ja": "JAPANESE",
    "ko": "KOREAN",
}
