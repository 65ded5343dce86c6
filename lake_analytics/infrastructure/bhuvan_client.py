"""
Infrastructure layer: Bhuvan WBIS surface-area data loader with retry logic.

Reads the per-water-body `metadata.json` and `wsa_daily.json` files either
from a local data directory or, when a base URL is configured, from a remote
mirror of the same folder layout.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field, ValidationError
from starlette.concurrency import run_in_threadpool
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from lake_analytics.config import settings
from lake_analytics.domain.models import RawAreaRecord
from lake_analytics.infrastructure.source_constants import BhuvanFiles

logger = logging.getLogger(__name__)


class BhuvanLakeData(BaseModel):
    """Everything published for one Bhuvan water body."""
    bhuvan_id: str
    lake_name: Optional[str] = Field(default=None, description="'Water Body Name' from metadata.json")
    records: List[RawAreaRecord] = Field(default_factory=list)


class DataSourceError(Exception):
    """Raised when a data source cannot be read."""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BhuvanWBISClient:
    """
    Loader for Bhuvan WBIS water body files.
    Implements retry logic with exponential backoff for the remote mirror.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        data_dir: Optional[str] = None,
        bhuvan_subdir: Optional[str] = None,
    ):
        """
        Initialize the loader with configuration.

        Args:
            base_url: Remote mirror URL; defaults to settings.bhuvan_base_url
            data_dir: Local data root; defaults to settings.data_dir
            bhuvan_subdir: Folder holding the water bodies; defaults to settings.bhuvan_subdir
        """
        self.base_url = base_url if base_url is not None else settings.bhuvan_base_url
        self.data_dir = Path(data_dir if data_dir is not None else settings.data_dir)
        self.bhuvan_subdir = bhuvan_subdir if bhuvan_subdir is not None else settings.bhuvan_subdir
        self.client: Optional[httpx.AsyncClient] = None

        if self.base_url:
            self.client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"accept": "application/json"},
                timeout=settings.request_timeout,
            )

    @property
    def is_remote(self) -> bool:
        return self.client is not None

    async def close(self):
        """Close the HTTP client, if any."""
        if self.client is not None:
            await self.client.aclose()

    async def __aenter__(self) -> "BhuvanWBISClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(self, path: str) -> Any:
        """
        GET a JSON document from the remote mirror.

        Args:
            path: Path relative to the base URL

        Returns:
            Decoded JSON payload

        Raises:
            DataSourceError: On client errors (4xx) or undecodable bodies
            httpx.HTTPStatusError: On server errors once retries are exhausted
            httpx.RequestError: On transport errors once retries are exhausted
        """
        response = await self.client.get(f"/{path}")
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                raise
            # Don't retry on client errors (4xx)
            raise DataSourceError(
                f"Bhuvan request failed: {e.response.status_code} - {path}",
                status_code=e.response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise DataSourceError(f"Invalid JSON from {path}: {e}")

    def _read_local(self, path: str) -> Any:
        """
        Read a JSON document from the local data directory.

        Raises:
            DataSourceError: If the file is missing or not valid JSON
        """
        file_path = self.data_dir / path
        if not file_path.is_file():
            raise DataSourceError(f"Bhuvan data file not found: {file_path}", status_code=404)
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(f"Failed to read {file_path}: {e}")

    async def _fetch_json(self, bhuvan_id: str, filename: str) -> Any:
        """Fetch one published file for a water body from whichever source is configured."""
        path = BhuvanFiles.relative_path(self.bhuvan_subdir, bhuvan_id, filename)

        if not self.is_remote:
            return await run_in_threadpool(self._read_local, path)

        try:
            return await self._make_request(path)
        except httpx.HTTPStatusError as e:
            raise DataSourceError(
                f"Bhuvan request failed after retries: {e.response.status_code} - {path}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise DataSourceError(f"Bhuvan request error: {str(e)}")

    async def get_metadata(self, bhuvan_id: str) -> Dict[str, Any]:
        """
        Fetch the metadata entry of a water body.

        Args:
            bhuvan_id: Bhuvan water body identifier

        Returns:
            First metadata entry, or an empty dict if none is published

        Raises:
            DataSourceError: If the file cannot be read
        """
        data = await self._fetch_json(bhuvan_id, BhuvanFiles.METADATA)
        if isinstance(data, list):
            return data[0] if data and isinstance(data[0], dict) else {}
        return data if isinstance(data, dict) else {}

    async def get_daily_records(self, bhuvan_id: str) -> List[RawAreaRecord]:
        """
        Fetch the daily water-surface-area series of a water body.

        Malformed entries are skipped individually.

        Args:
            bhuvan_id: Bhuvan water body identifier

        Returns:
            List of RawAreaRecord, in published order

        Raises:
            DataSourceError: If the file cannot be read or is not a list
        """
        data = await self._fetch_json(bhuvan_id, BhuvanFiles.WSA_DAILY)
        if not isinstance(data, list):
            raise DataSourceError(f"Unexpected {BhuvanFiles.WSA_DAILY} payload for {bhuvan_id}")

        records = []
        skipped = 0
        for entry in data:
            try:
                records.append(RawAreaRecord.model_validate(entry))
            except ValidationError:
                skipped += 1

        if skipped:
            logger.warning(f"Skipped {skipped} malformed entries in {bhuvan_id}/{BhuvanFiles.WSA_DAILY}")

        return records

    async def load_lake(self, bhuvan_id: str) -> Optional[BhuvanLakeData]:
        """
        Load metadata and daily records for a water body.

        Args:
            bhuvan_id: Bhuvan water body identifier

        Returns:
            BhuvanLakeData, or None if the source could not be read
        """
        try:
            metadata = await self.get_metadata(bhuvan_id)
            records = await self.get_daily_records(bhuvan_id)
        except DataSourceError as e:
            logger.error(f"Error loading Bhuvan data for {bhuvan_id}: {e.message}")
            return None

        logger.info(f"Loaded {len(records)} Bhuvan records for {bhuvan_id}")
        return BhuvanLakeData(
            bhuvan_id=bhuvan_id,
            lake_name=metadata.get(BhuvanFiles.WATER_BODY_NAME) or None,
            records=records,
        )


# Singleton instance
_bhuvan_client: Optional[BhuvanWBISClient] = None


def get_bhuvan_client() -> BhuvanWBISClient:
    """
    Get or create the singleton Bhuvan client instance.

    Returns:
        BhuvanWBISClient instance
    """
    global _bhuvan_client
    if _bhuvan_client is None:
        _bhuvan_client = BhuvanWBISClient()
    return _bhuvan_client
