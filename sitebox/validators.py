"""Answer validators for the site wizard.

Every validator returns ``None`` when the answer is acceptable, or a
human-readable reason to show the operator before asking again. None of
them raise.
"""

from __future__ import annotations

import re
from typing import Callable, Optional

import validators as checks
from pydantic import HttpUrl, TypeAdapter, ValidationError

_SAFE_NAME_RE = re.compile(r"[A-Za-z0-9\-._]+")
_POSITIVE_INT_RE = re.compile(r"\+?[1-9][0-9]*")
_HTTP_URL = TypeAdapter(HttpUrl)

# Longest directory name most filesystems accept, in bytes.
MAX_NAME_BYTES = 255


def non_empty(answer: str) -> Optional[str]:
    if not answer:
        return "A value is required."
    return None


def safe_name(answer: str, site_exists: Callable[[str], bool]) -> Optional[str]:
    """Validate a prompted site directory name.

    The registry lookup happens before the character check, so a taken
    name is reported as taken even when it is also malformed.
    """
    if not answer:
        return "Please enter a local site directory name."
    if len(answer.encode("utf-8")) > MAX_NAME_BYTES:
        return "Please enter a valid local site directory name."
    if site_exists(answer):
        return f'The site directory "{answer}" already exists.'
    if not _SAFE_NAME_RE.fullmatch(answer):
        return "Please enter a valid local site directory name."
    return None


def is_fqdn(value: str) -> bool:
    """Return True if *value* is a fully-qualified domain name.

    Underscores are refused even where DNS tolerates them, since they are
    not valid in host names.
    """
    if not value or "_" in value:
        return False
    return bool(checks.domain(value))


def fqdn(answer: str) -> Optional[str]:
    if not answer:
        return "Please enter a local domain name."
    if not is_fqdn(answer):
        return "Please enter a valid local domain name."
    return None


def is_http_url(value: str) -> bool:
    """Return True if *value* is an absolute http(s) URL.

    The host must be an IP address or a domain with a top-level label, and
    an explicit port must be non-zero.
    """
    if not value or any(ch.isspace() for ch in value):
        return False
    try:
        url = _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    host = url.host or ""
    if url.port == 0:
        return False
    if host.startswith("["):
        return bool(checks.ipv6(host.strip("[]")))
    return bool(checks.ipv4(host)) or is_fqdn(host)


def optional_url(answer: str) -> Optional[str]:
    if not answer:
        return None
    if not is_http_url(answer):
        return "Please enter a valid URL."
    return None


def positive_int(answer: str) -> Optional[str]:
    """Accept decimal integers greater than zero written without leading zeroes."""
    if not _POSITIVE_INT_RE.fullmatch(answer or ""):
        return "Please enter a whole number greater than zero."
    return None
