"""Single-shot HTTP GET used by the provider clients."""

from typing import Any

import requests

from jakesky.utils.exceptions import ProviderTimeoutError, TransportError
from jakesky.utils.logger import setup_logger

logger = setup_logger(__name__)

REQUEST_HEADERS = {
    "Accept": "application/json",
    "Accept-Encoding": "gzip",
}


def http_get(url: str, params: dict[str, Any], provider: str, timeout: float) -> str:
    """Fetch a provider endpoint and return the response body.

    No retries are attempted; a slow or failing provider fails the run.
    Query parameters carry the API key, so only the bare URL is logged.

    Args:
        url: Endpoint URL without query string.
        params: Query parameters, including the credential.
        provider: Provider identifier for error context.
        timeout: Request timeout in seconds.

    Returns:
        Response body text.

    Raises:
        ProviderTimeoutError: If the request exceeds ``timeout``.
        TransportError: On connection failures or HTTP error statuses.
    """
    logger.debug(f"GET {url}")

    try:
        response = requests.get(
            url, params=params, headers=REQUEST_HEADERS, timeout=timeout
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"{provider} request timed out after {timeout}s: {url}")
        raise ProviderTimeoutError(
            f"{provider} request timed out",
            provider,
            context={"url": url, "timeout_s": timeout},
        ) from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"{provider} HTTP error {response.status_code}: {url}")
        raise TransportError(
            f"{provider} returned HTTP {response.status_code}",
            provider,
            context={
                "url": url,
                "status_code": response.status_code,
                "response": response.text[:500],
            },
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"{provider} request failed: {url}")
        raise TransportError(
            f"{provider} request failed",
            provider,
            context={"url": url, "error": type(e).__name__},
        ) from e

    logger.debug(f"{provider} responded with {len(response.text)} bytes from {url}")
    return response.text
