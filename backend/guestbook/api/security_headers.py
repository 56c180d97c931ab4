"""Security Headers — response headers applied to every API response.

Invariants:
    - Set by the http middleware for routed responses and by the catch-all
      handler for unhandled 500s (which bypass user middleware)
    - Never overwrite a header a route already set
"""

from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-XSS-Protection": "1; mode=block",
}


def apply_security_headers(response: Response) -> Response:
    for header, value in SECURITY_HEADERS.items():
        response.headers.setdefault(header, value)
    return response
