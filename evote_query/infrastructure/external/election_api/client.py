"""Client for the backend election listing service.

httpx async client for ``GET {base_url}/elections``. The response is either a
JSON list of elections or an object wrapping it under ``elections`` (or
``data``).
"""

from __future__ import annotations

import logging

from typing import Any

import httpx

from evote_query.domain.entities.election_record import ElectionRecord
from evote_query.infrastructure.importers.election_row import parse_election_rows


logger = logging.getLogger(__name__)


class ElectionApiError(Exception):
    """Listing service request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ElectionApiClient:
    """Collection provider that fetches elections over HTTP."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        token: str | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._external_client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._external_client is not None:
            return self._external_client
        return httpx.AsyncClient(timeout=self.timeout)

    async def fetch_elections(self) -> list[ElectionRecord]:
        """Fetch and validate the current election list.

        Raises:
            ElectionApiError: HTTP error status, timeout or transport failure
        """
        data = await self._request("elections")
        rows = self._extract_rows(data)
        records = parse_election_rows(rows, f"{self.base_url}/elections")
        logger.info("Fetched %d elections from %s", len(records), self.base_url)
        return records

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}/{endpoint}"
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        client = await self._get_client()

        try:
            response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ElectionApiError(
                f"Request failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise ElectionApiError("Request timed out") from e
        except httpx.HTTPError as e:
            raise ElectionApiError(f"HTTP error: {e}") from e
        except ValueError as e:
            raise ElectionApiError(f"Response is not valid JSON: {e}") from e
        finally:
            if self._owns_client:
                await client.aclose()

    @staticmethod
    def _extract_rows(data: Any) -> Any:
        if isinstance(data, dict):
            for key in ("elections", "data"):
                if key in data:
                    return data[key]
            return []
        return data
