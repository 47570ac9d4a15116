"""
Response hardening for the JSON API.

Every response under /api carries anti-framing, no-sniff and referrer
headers, a Content-Security-Policy that forbids loading anything, and
``Cache-Control: no-store`` so tenant data never lands in shared caches.
HSTS is only sent in production, where the API sits behind HTTPS.
"""

import logging
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from .config import IS_PRODUCTION

logger = logging.getLogger(__name__)

# Browser features no API response should ever be granted
DISABLED_FEATURES = ("camera", "microphone", "geolocation", "payment", "usb")

CSP_DIRECTIVES = (
    "default-src 'none'",
    "frame-ancestors 'none'",
    "base-uri 'none'",
    "form-action 'none'",
)


def get_csp_policy() -> str:
    return "; ".join(CSP_DIRECTIVES)


def get_permissions_policy() -> str:
    return ", ".join(f"{feature}=()" for feature in DISABLED_FEATURES)


def get_security_headers_dict() -> dict:
    """Headers added to every API response"""
    headers = {
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "no-referrer",
        "Content-Security-Policy": get_csp_policy(),
        "Permissions-Policy": get_permissions_policy(),
        "Cross-Origin-Resource-Policy": "same-site",
    }
    if IS_PRODUCTION:
        headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return headers


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds ``get_security_headers_dict()`` to responses.

    Paths starting with one of ``exclude_paths`` (health check, API docs)
    are passed through untouched.
    """

    def __init__(self, app, exclude_paths: Optional[list[str]] = None):
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or ())
        self.headers = get_security_headers_dict()
        logger.debug(f"🛡️ Security headers: {sorted(self.headers)}")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.exclude_paths):
            return response

        response.headers.update(self.headers)
        response.headers.setdefault("Cache-Control", "no-store")
        return response
