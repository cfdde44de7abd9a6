"""Minimal GraphQL-over-HTTP client.

Posts `{"query", "variables"}` and returns the `data` object. HTTP errors,
transport errors and top-level GraphQL `errors` all become `RegistryError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import RegistryError

logger = logging.getLogger(__name__)


def join_error_messages(errors: object) -> str:
    if not isinstance(errors, list):
        return ""
    messages = []
    for err in errors:
        if isinstance(err, dict) and err.get("message"):
            messages.append(str(err["message"]))
    return "\n".join(messages)


class GraphQLClient:
    """Stateless apart from the pooled `httpx.AsyncClient` it owns."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = build_async_client(self._settings, transport=transport)

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def run(
        self,
        query: str,
        variables: dict[str, Any] | None = None,
        *,
        operation: str,
    ) -> dict[str, Any]:
        body = {"query": query, "variables": variables or {}}
        logger.debug("GraphQL %s -> %s variables=%s", operation, self._settings.graphql_url, variables)

        try:
            resp = await self._client.post(self._settings.graphql_url, json=body)
        except httpx.HTTPError as exc:
            raise RegistryError(f"{operation}: request failed: {exc}") from exc

        logger.debug("GraphQL %s <- HTTP %s", operation, resp.status_code)

        try:
            payload = resp.json()
        except json.JSONDecodeError as exc:
            raise RegistryError(
                f"{operation}: unexpected response (HTTP {resp.status_code}): {resp.text[:200]}"
            ) from exc

        if not isinstance(payload, dict):
            raise RegistryError(f"{operation}: unexpected response shape")

        messages = join_error_messages(payload.get("errors"))
        if messages:
            raise RegistryError(messages)
        if resp.status_code >= 400:
            raise RegistryError(f"{operation}: HTTP {resp.status_code}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RegistryError(f"{operation}: response contained no data")
        return data
