"""HermesClient: Fetches signed price update data from the Pyth Hermes service.

Endpoint: {hermes_url}/v2/updates/price/latest?ids[]=...&ids[]=...
Response: ``{"binary": {"encoding": "hex", "data": ["504e41...", ...]}, ...}``

.. code-block:: python

    client = HermesClient("https://hermes.pyth.network")
    blobs = await client.fetch_price_updates([ETH_USD_PRICE_ID])
    # ['0x504e41...']
"""

import logging
import re
from collections.abc import Sequence
from typing import Any

import httpx

from .errors import FetchError, FetchHTTPError

logger = logging.getLogger(__name__)

LATEST_UPDATES_PATH = "/v2/updates/price/latest"

_HEX_RE = re.compile(r"^(0x)?[0-9a-fA-F]+$")


def normalize_update_blob(blob: str) -> str:
    """Prefix a hex string with ``0x`` if it is missing.

    :param blob: Hex-encoded update payload.
    :returns: The payload with a ``0x`` prefix.
    """
    if not blob.startswith("0x"):
        blob = "0x" + blob
    return blob


def parse_update_data(payload: Any) -> list[str]:
    """Validate a Hermes response body and extract the update blobs.

    :param payload: Decoded JSON body.
    :returns: List of ``0x``-prefixed hex blobs, one per returned element.
    :raises FetchError: If the body does not match the expected shape.
    """
    if not isinstance(payload, dict):
        raise FetchError(f"Unexpected response type: {type(payload).__name__}")

    binary = payload.get("binary")
    if not isinstance(binary, dict):
        raise FetchError("Response is missing the 'binary' object")

    encoding = binary.get("encoding", "hex")
    if encoding != "hex":
        raise FetchError(f"Unsupported binary encoding: {encoding!r}")

    data = binary.get("data")
    if not isinstance(data, list) or not data:
        raise FetchError("Response 'binary.data' must be a non-empty list")

    blobs = []
    for i, item in enumerate(data):
        if not isinstance(item, str) or not _HEX_RE.match(item):
            raise FetchError(f"Response 'binary.data[{i}]' is not a hex string")
        blobs.append(normalize_update_blob(item))
    return blobs


class HermesClient:
    """Client for the Hermes price attestation API.

    A short-lived ``httpx.AsyncClient`` is opened per request so no
    connection state survives between cycles.

    :ivar base_url: Hermes base URL without trailing slash.
    :ivar timeout: Request timeout in seconds.
    :ivar transport: Optional httpx transport override.
    """

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        :param base_url: Hermes base URL (e.g., "https://hermes.pyth.network").
        :param timeout: Request timeout in seconds (default: 10).
        :param transport: Optional transport, used by tests to stub the service.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout or self.DEFAULT_TIMEOUT
        self.transport = transport

    async def _get(self, url: str, *, params: Any = None) -> httpx.Response:
        """Make an HTTP GET request.

        :param url: Request URL.
        :param params: Optional query parameters.
        :returns: httpx.Response object.
        :raises FetchHTTPError: On non-2xx response.
        :raises FetchError: On network/timeout errors.
        """
        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.TimeoutException as e:
                raise FetchError(f"Request timeout: {e}") from e
            except httpx.RequestError as e:
                raise FetchError(f"Request failed: {e}") from e

        if not response.is_success:
            logger.debug(
                "HTTP GET %s failed with status %s: %s",
                url,
                response.status_code,
                response.text[:200],
            )
            raise FetchHTTPError(response.status_code, response.text[:200])
        return response

    async def fetch_price_updates(self, price_ids: Sequence[str]) -> list[str]:
        """Fetch the latest signed update blobs for the given feeds.

        :param price_ids: Feed identifiers, sent as repeated ``ids[]`` parameters.
        :returns: One ``0x``-prefixed blob per element returned by the service.
        :raises FetchError: If the request fails or the response is malformed.
        """
        if not price_ids:
            raise FetchError("At least one price feed id is required")

        url = self.base_url + LATEST_UPDATES_PATH
        params = [("ids[]", price_id) for price_id in price_ids]

        response = await self._get(url, params=params)
        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(f"Response is not valid JSON: {e}") from e

        blobs = parse_update_data(payload)
        logger.info(
            f"Retrieved {len(blobs)} price update(s) for {len(price_ids)} feed(s)"
        )
        return blobs
