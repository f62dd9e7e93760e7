"""
Remote asset fetching.

Single-shot HTTP GET with a bounded timeout and a fixed identifying User-Agent.
No retries: a slow or broken icon host must not stall the build.
"""

from typing import Optional

import requests

from genkan.contexts.assets.exceptions import FetchFailed

FETCH_TIMEOUT_S = 10
USER_AGENT = "Mozilla/5.0 (compatible; Genkan/1.0)"
REQUEST_HEADERS = {"User-Agent": USER_AGENT}


def normalize_url(url: str) -> str:
    """Give protocol-relative URLs (//host/path) an explicit https scheme."""
    if url.startswith("//"):
        return f"https:{url}"
    return url


def fetch_bytes(url: str, session: Optional[requests.Session] = None) -> bytes:
    """
    Download the raw bytes behind a URL.

    Args:
        url: http://, https:// or protocol-relative URL
        session: Optional requests session (defaults to a one-off request)

    Returns:
        Response body

    Raises:
        FetchFailed: On transport error, timeout, or non-success status
    """
    getter = session.get if session is not None else requests.get

    try:
        response = getter(normalize_url(url), headers=REQUEST_HEADERS, timeout=FETCH_TIMEOUT_S)
    except requests.Timeout as e:
        raise FetchFailed(
            f"Timed out after {FETCH_TIMEOUT_S}s downloading {url}", reference=url, original_error=e
        ) from e
    except requests.RequestException as e:
        raise FetchFailed(f"Failed to download {url}", reference=url, original_error=e) from e

    if not response.ok:
        raise FetchFailed(
            f"Failed to download {url}: HTTP {response.status_code}",
            reference=url,
            status_code=response.status_code,
        )

    return response.content
