"""
Request origin resolution for domain-bound tokens.

Tokens carry the hostname of the front end that requested them; the guard
recomputes the hostname for every protected request and compares the two.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from fastapi import Request


def hostname_from_url(value: Optional[str]) -> str:
    """Return the hostname part of *value* (scheme, port and path stripped).

    Returns ``""`` when *value* is empty or is not an absolute URL.
    """
    if not value:
        return ""
    try:
        return urlsplit(value.strip()).hostname or ""
    except ValueError:
        return ""


def request_origin(request: Request) -> str:
    """Return the raw ``Origin`` header, falling back to ``Referer``."""
    return request.headers.get("origin") or request.headers.get("referer") or ""


def request_domain(request: Request) -> str:
    """Hostname of the front end that sent *request*, or ``""`` if unknown.

    A request without either header yields an empty domain; a token issued
    for a real front end will therefore not validate on it.
    """
    return hostname_from_url(request_origin(request))
