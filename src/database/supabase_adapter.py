"""Supabase REST adapters - HTTP clients for the hosted row store and storage bucket."""
import logging
import requests
from typing import Any, Dict, Iterable, List, Optional

from notes_api.errors import BlobStoreError, RowStoreError

logger = logging.getLogger(__name__)


def _auth_headers(api_key: str) -> Dict[str, str]:
    return {
        "apikey": api_key,
        "Authorization": f"Bearer {api_key}",
    }


class SupabaseRowStore:
    """HTTP client implementing the row store interface against PostgREST."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        """Initialize HTTP adapter for a Supabase project.

        Args:
            base_url: Project URL, e.g. https://<project>.supabase.co
            api_key: Publishable (anon) API key
            timeout: Request timeout in seconds
            session: Optional preconfigured session
        """
        self.base_url = f"{base_url.rstrip('/')}/rest/v1"
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(_auth_headers(api_key))

        logger.info(f"SupabaseRowStore initialized for {self.base_url}")

    def _request(self, method: str, table: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/{table}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise RowStoreError(f"{method} {table} failed: {e}") from e

    def _json(self, response: requests.Response, table: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {table}: {e}")
            raise RowStoreError(f"{table} returned a non-JSON body") from e

    def insert_one(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as the server stored it."""
        response = self._request(
            "POST",
            table,
            json=row,
            headers={"Prefer": "return=representation"},
        )
        created = self._json(response, table)
        if isinstance(created, list):
            if not created:
                raise RowStoreError(f"Insert into {table} returned no row")
            created = created[0]
        if not isinstance(created, dict):
            raise RowStoreError(f"Insert into {table} returned {type(created).__name__}, not a row")
        logger.debug(f"Created row in {table}: {created.get('id')}")
        return created

    def select_all(self, table: str, order_by: str = "created_at") -> List[Dict[str, Any]]:
        response = self._request(
            "GET",
            table,
            params={"select": "*", "order": f"{order_by}.desc"},
        )
        rows = self._json(response, table)
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise RowStoreError(f"Select from {table} did not return a list of rows")
        return rows

    def delete_by_id(self, table: str, row_id: str) -> None:
        self._request("DELETE", table, params={"id": f"eq.{row_id}"})

    def delete_by_ids(self, table: str, row_ids: Iterable[str]) -> None:
        row_ids = list(row_ids)
        if not row_ids:
            return
        quoted = ",".join(f'"{row_id}"' for row_id in row_ids)
        self._request("DELETE", table, params={"id": f"in.({quoted})"})


class SupabaseBlobStore:
    """HTTP client implementing the blob store interface against Supabase Storage."""

    def __init__(self, base_url: str, api_key: str, bucket: str, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.base_url = f"{base_url.rstrip('/')}/storage/v1"
        self.bucket = bucket
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(_auth_headers(api_key))

        logger.info(f"SupabaseBlobStore initialized for bucket {bucket} at {self.base_url}")

    def upload(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        url = f"{self.base_url}/object/{self.bucket}/{key}"
        try:
            response = self.session.post(
                url,
                data=data,
                headers={"Content-Type": content_type or "application/octet-stream"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Upload of {key} failed: {e}")
            raise BlobStoreError(f"Upload of {key} failed: {e}") from e
        logger.info(f"Uploaded {key} to bucket {self.bucket}")

    def get_public_url(self, key: str) -> str:
        return f"{self.base_url}/object/public/{self.bucket}/{key}"

    def remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        url = f"{self.base_url}/object/{self.bucket}"
        try:
            response = self.session.delete(url, json={"prefixes": keys}, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Removal of {len(keys)} object(s) failed: {e}")
            raise BlobStoreError(f"Removal from {self.bucket} failed: {e}") from e
        logger.info(f"Removed {len(keys)} object(s) from bucket {self.bucket}")
