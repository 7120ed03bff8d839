"""
Remote Config Sync

Fetches the latest value set from the remote configuration backend.

Reuses a single HTTP client across fetches. Every failure surfaces as a
FetchError of kind network, parse or throttled.
"""

from typing import Any

import httpx

from remoteconfig.common.exceptions import FetchError, FetchErrorKind
from remoteconfig.common.logging_setup import get_service_logger
from remoteconfig.common.settings import BackendSettings

from .values import ConfigValue, value_type_of

logger = get_service_logger("config.sync")

# Template states that carry no entries
EMPTY_STATES = frozenset(("NO_CHANGE", "NO_TEMPLATE", "EMPTY_CONFIG"))


class RemoteConfigSync:
    """
    Client for the backend fetch endpoint.

    POST {url}/v1/projects/{project}/namespaces/{namespace}:fetch
    returns {"entries": {key: value}, "state": ..., "templateVersion": ...}.
    """

    def __init__(
        self,
        backend: BackendSettings,
        client: httpx.AsyncClient | None = None,
    ):
        self.backend = backend
        self._client = client
        self._owns_client = client is None
        self.template_version: str | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create reusable HTTP client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.backend.timeout_s)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client"""
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.backend.api_key:
            headers["X-Goog-Api-Key"] = self.backend.api_key
        return headers

    async def fetch(self) -> dict[str, ConfigValue]:
        """
        Fetch the latest value set.

        Returns:
            Key -> value mapping (possibly empty)

        Raises:
            FetchError: on transport failure, HTTP error, throttling or
                a malformed response
        """
        if not self.backend.project_id:
            raise FetchError(FetchErrorKind.NETWORK, "No backend project_id configured")

        client = await self._get_client()
        try:
            response = await client.post(
                self.backend.fetch_url,
                json={
                    "appInstanceId": self.backend.app_instance_id,
                    "appId": self.backend.app_id,
                },
                headers=self._headers(),
                timeout=self.backend.timeout_s,
            )
        except httpx.HTTPError as e:
            raise FetchError(FetchErrorKind.NETWORK, f"{type(e).__name__}: {e}")

        if response.status_code == 429:
            raise FetchError(
                FetchErrorKind.THROTTLED,
                "Backend throttled the fetch",
                status_code=response.status_code,
            )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                FetchErrorKind.NETWORK,
                f"HTTP {response.status_code}: {e}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise FetchError(FetchErrorKind.PARSE, f"Invalid JSON: {e}")

        entries = self._parse_payload(payload)

        logger.info(
            f"Fetched {len(entries)} entries (state: {payload.get('state')})",
            extra={
                "entry_count": len(entries),
                "template_version": self.template_version,
            },
        )
        return entries

    def _parse_payload(self, payload: Any) -> dict[str, ConfigValue]:
        """Validate the response body and extract typed entries"""
        if not isinstance(payload, dict):
            raise FetchError(FetchErrorKind.PARSE, "Response body must be a JSON object")

        version = payload.get("templateVersion")
        if version is not None:
            self.template_version = str(version)

        state = payload.get("state")
        raw_entries = payload.get("entries")
        if raw_entries is None or state in EMPTY_STATES:
            return {}
        if not isinstance(raw_entries, dict):
            raise FetchError(FetchErrorKind.PARSE, "'entries' must be a JSON object")

        entries: dict[str, ConfigValue] = {}
        for key, value in raw_entries.items():
            try:
                value_type_of(value)
            except TypeError as e:
                raise FetchError(FetchErrorKind.PARSE, f"Entry {key!r}: {e}")
            entries[key] = value
        return entries
