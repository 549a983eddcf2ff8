"""Thin client for the Supabase (PostgREST) `participants` table."""

import logging

import httpx

from walkathon.errors import PersistenceFailure

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10.0


class SupabaseStore:
    """
    Remote registration store speaking the Supabase REST API.

    Only three operations are used: insert returning the stored row, select
    ordered by creation time, and update by identifier.

    Every transport or HTTP error is raised as PersistenceFailure.
    """

    def __init__(
        self,
        url: str,
        key: str,
        table: str = "participants",
        client: httpx.Client | None = None,
    ):
        self.url = url
        self.key = key
        self.table = table
        self.client = client

    def __repr__(self):
        return f"SupabaseStore({self.endpoint})"

    @property
    def endpoint(self) -> str:
        return f"{self.url.rstrip('/')}/rest/v1/{self.table}"

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Accept": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(self, method: str, params=None, json=None, prefer=None):
        headers = self._headers(prefer)
        try:
            if self.client is not None:
                response = self.client.request(
                    method, self.endpoint, params=params, json=json, headers=headers
                )
                response.raise_for_status()
            else:
                with httpx.Client(timeout=REQUEST_TIMEOUT) as client:
                    response = client.request(
                        method, self.endpoint, params=params, json=json, headers=headers
                    )
                    response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PersistenceFailure(
                f"Supabase {method} {self.table} failed: {e}"
            ) from e
        return response

    def _json(self, response):
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceFailure(f"Supabase returned invalid JSON: {e}") from e

    def insert(self, record: dict) -> dict:
        """
        Insert one row and return it as stored (with its final identifier).

        Raises:
            PersistenceFailure: If the request fails or returns no row.
        """
        response = self._request(
            "POST", params={"select": "*"}, json=[record], prefer="return=representation"
        )
        rows = self._json(response)
        if isinstance(rows, list) and rows:
            return rows[0]
        if isinstance(rows, dict):
            return rows
        raise PersistenceFailure("Supabase insert returned no rows")

    def select_ordered(self, order: str = "created_at.desc") -> list[dict]:
        """All rows, newest first by default."""
        response = self._request("GET", params={"select": "*", "order": order})
        rows = self._json(response)
        if not isinstance(rows, list):
            raise PersistenceFailure("Unexpected payload from Supabase select")
        return [row for row in rows if isinstance(row, dict)]

    def update(self, record_id, changes: dict) -> None:
        """Apply `changes` to the row whose `id` equals `record_id`."""
        self._request(
            "PATCH",
            params={"id": f"eq.{record_id}"},
            json=changes,
            prefer="return=minimal",
        )
