"""Table access on the hosted backend (PostgREST / Supabase REST API).

The checkout flow only ever inserts; ``select_one`` exists for the bot's
product lookup.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Any, Protocol

import aiohttp

from storefront.core.exceptions import PersistenceException

logger = logging.getLogger(__name__)


class TableClient(Protocol):
    async def insert(
        self, table: str, record: dict[str, Any], *, on_conflict: str | None = None
    ) -> dict[str, Any]: ...


class RestTableClient:
    """aiohttp client for ``<base_url>/rest/v1/<table>``."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        session: aiohttp.ClientSession | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _table_url(self, table: str) -> str:
        return f"{self._base_url}/rest/v1/{table}"

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json_body: Any = None,
        prefer: str | None = None,
    ) -> Any:
        session = self._get_session()
        url = self._table_url(table)
        try:
            async with session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=self._headers(prefer),
                timeout=self._timeout,
            ) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    logger.error("%s %s failed: %s - %s", method, table, resp.status, body)
                    raise PersistenceException(
                        f"{method} {table} failed with HTTP {resp.status}",
                        status=resp.status,
                        details=body,
                    )
                if resp.status == 204:
                    return None
                try:
                    return await resp.json(content_type=None)
                except ValueError as exc:
                    logger.error("%s %s returned a non-JSON body: %s", method, table, exc)
                    raise PersistenceException(
                        f"{method} {table} returned an unreadable response",
                        status=resp.status,
                    ) from exc
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("%s %s failed: %s", method, table, exc)
            raise PersistenceException(f"{method} {table} failed: {exc}") from exc

    async def insert(
        self, table: str, record: dict[str, Any], *, on_conflict: str | None = None
    ) -> dict[str, Any]:
        """Insert one row and return it (``{}`` if a duplicate was ignored)."""
        prefer = "return=representation"
        params = None
        if on_conflict:
            prefer += ",resolution=ignore-duplicates"
            params = {"on_conflict": on_conflict}

        rows = await self._request("POST", table, params=params, json_body=record, prefer=prefer)
        if isinstance(rows, list):
            rows = rows[0] if rows else None
        return rows if isinstance(rows, dict) else {}

    async def select_one(
        self, table: str, row_id: str, columns: str = "*"
    ) -> dict[str, Any] | None:
        rows = await self._request(
            "GET",
            table,
            params={"id": f"eq.{row_id}", "select": columns, "limit": "1"},
        )
        if isinstance(rows, list) and rows and isinstance(rows[0], dict):
            return rows[0]
        return None


class MemoryTableClient:
    """In-process tables for tests and offline runs."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = tables or {}
        self.insert_calls = 0
        self.fail_with: PersistenceException | None = None
        self.delay: float = 0.0

    async def insert(
        self, table: str, record: dict[str, Any], *, on_conflict: str | None = None
    ) -> dict[str, Any]:
        self.insert_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with

        rows = self.tables.setdefault(table, [])
        if on_conflict and record.get(on_conflict) is not None:
            if any(row.get(on_conflict) == record[on_conflict] for row in rows):
                logger.info("Ignoring duplicate %s row on %s", table, on_conflict)
                return {}

        row = {"id": str(uuid.uuid4()), **record}
        rows.append(row)
        return dict(row)

    async def select_one(
        self, table: str, row_id: str, columns: str = "*"
    ) -> dict[str, Any] | None:
        for row in self.tables.get(table, []):
            if str(row.get("id")) == str(row_id):
                return dict(row)
        return None

    async def close(self) -> None:
        return None
