"""GraphQL client for the media catalog.

POSTs {query, variables} as JSON to the catalog's /graphql endpoint.

Failure modes:
- Network error or non-2xx status → TransportError (status and body text in the message)
- "errors" in an otherwise successful response → ProtocolError
- A body that is not a GraphQL envelope → ProtocolError
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests
from pydantic import BaseModel, Field, ValidationError

from markstats.helpers.exceptions import ProtocolError, TransportError

logger = logging.getLogger(__name__)

_REQUEST_TIMEOUT = 30  # seconds


class GraphQLEnvelope(BaseModel):
    """Top-level GraphQL response body."""

    data: dict[str, Any] | None = None
    errors: list[Any] | None = None


class FindResult(BaseModel):
    """The {count, items[]} payload of a find* query, items kept raw for normalization."""

    count: int = 0
    items: list[dict[str, Any]] = Field(default_factory=list)


class GraphQLClient:
    """Blocking GraphQL client; callers run it in a worker thread when on the event loop."""

    def __init__(
        self,
        url: str,
        timeout: float = _REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Run one query and return its data object.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            The response's "data" dict

        Raises:
            TransportError: Request failed or returned a non-success status
            ProtocolError: Response carried GraphQL errors or was malformed
        """
        try:
            response = self._session.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"GraphQL request to {self.url} failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"GraphQL query failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            envelope = GraphQLEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ProtocolError(f"GraphQL response is not a valid envelope: {e}") from e

        if envelope.errors:
            logger.error(f"GraphQL Errors: {envelope.errors}")
            raise ProtocolError(f"GraphQL query failed: {json.dumps(envelope.errors)}", errors=envelope.errors)

        if envelope.data is None:
            raise ProtocolError("GraphQL response carried neither data nor errors")
        return envelope.data

    def find(self, query: str, variables: dict[str, Any], result_field: str, items_field: str) -> FindResult:
        """
        Run a find* query and unpack its {count, <items_field>} payload.

        Raises:
            TransportError, ProtocolError: As execute(); ProtocolError also when the payload is missing
        """
        data = self.execute(query, variables)
        payload = data.get(result_field)
        if not isinstance(payload, dict):
            raise ProtocolError(f"GraphQL response is missing {result_field!r}")
        try:
            return FindResult.model_validate({"count": payload.get("count") or 0, "items": payload.get(items_field) or []})
        except ValidationError as e:
            raise ProtocolError(f"Malformed {result_field} payload: {e}") from e

    def close(self) -> None:
        self._session.close()
