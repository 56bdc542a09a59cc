"""
Learning resource sanitization.

Models readily invent links that look plausible but do not exist. A
resourceUrl survives only if it is a well-formed public http(s) URL and,
when an allowlist of catalogued links is supplied, one of those links.
Modules left without a link always get a usable set of search keywords.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence
from urllib.parse import urlsplit

from skillpath.assessment.models import ModuleItem

logger = logging.getLogger(__name__)

IPV4_HOST_PATTERN = re.compile(r"\d+\.\d+\.\d+\.\d+", re.ASCII)

MIN_FALLBACK_KEYWORDS = 3
MAX_FALLBACK_KEYWORDS = 8
MAX_KEYWORDS_WITH_URL = 10
FALLBACK_SEED_TERMS = ("learning", "beginner")


def is_likely_public_http_url(url: str) -> bool:
    """
    Check that url is http(s) and points at a plausible public host.

    Rejects localhost, *.local hosts, bare IPv4 literals and hosts
    without a dot.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return False

    if parts.scheme.lower() not in ("http", "https"):
        return False

    if not host:
        return False

    host = host.lower()
    if host == "localhost" or host.endswith(".local"):
        return False

    if IPV4_HOST_PATTERN.fullmatch(host):
        return False

    return "." in host


def _clean_keywords(keywords: Optional[Iterable[str]]) -> List[str]:
    """Trimmed, non-empty keyword strings in their original order."""
    if not keywords:
        return []
    return [k.strip() for k in keywords if isinstance(k, str) and k.strip()]


def _ensure_fallback_keywords(module: ModuleItem) -> List[str]:
    """Keep 3-8 existing keywords, or seed a list from the module itself."""
    existing = _clean_keywords(module.searchKeywords)
    if len(existing) >= MIN_FALLBACK_KEYWORDS:
        return existing[:MAX_FALLBACK_KEYWORDS]

    seeds = [module.title.strip(), module.type, *FALLBACK_SEED_TERMS]
    return [seed for seed in seeds if seed][:MAX_FALLBACK_KEYWORDS]


def sanitize_module(
    module: ModuleItem,
    allowed_urls: Optional[Iterable[str]] = None,
) -> ModuleItem:
    """
    Sanitize a single module.

    Args:
        module: Validated module
        allowed_urls: Optional allowlist; when non-empty a URL must be in it

    Returns:
        New module with an untrusted resourceUrl dropped and keywords ensured
    """
    allowset = {u.strip() for u in (allowed_urls or []) if isinstance(u, str) and u.strip()}

    url = module.resourceUrl.strip() if isinstance(module.resourceUrl, str) else ""

    if url and not is_likely_public_http_url(url):
        logger.debug(f"Dropping non-public resourceUrl on module {module.id}")
        url = ""

    if url and allowset and url not in allowset:
        logger.debug(f"Dropping resourceUrl outside allowlist on module {module.id}")
        url = ""

    if not url:
        return module.model_copy(update={
            "resourceUrl": None,
            "searchKeywords": _ensure_fallback_keywords(module),
        })

    update = {"resourceUrl": url}
    if module.searchKeywords is not None:
        keywords = _clean_keywords(module.searchKeywords)[:MAX_KEYWORDS_WITH_URL]
        update["searchKeywords"] = keywords or None
    return module.model_copy(update=update)


def sanitize_modules(
    modules: Sequence[ModuleItem],
    allowed_urls: Optional[Iterable[str]] = None,
) -> List[ModuleItem]:
    """
    Sanitize every module independently. Never fails.

    Args:
        modules: Validated modules
        allowed_urls: Optional allowlist of catalogued resource links

    Returns:
        Sanitized modules in the same order
    """
    allowed = list(allowed_urls) if allowed_urls is not None else None
    return [sanitize_module(module, allowed) for module in modules]
