"""
Client for the dashboard's patients endpoint.
Issues one GET per call and turns the JSON body into typed records.
"""

import logging
from typing import Any, Optional

import requests
from pydantic import ValidationError

from ..models import Record, RecordSet

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "/api/patients"
ALL_GENDERS = "All"


class FetchError(Exception):
    """Network failure, non-2xx status or unparseable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def parse_records(payload: Any) -> RecordSet:
    """Validate a decoded JSON payload into a record set."""
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array, got {type(payload).__name__}")
    records = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise FetchError(f"Record {i} is not a JSON object")
        try:
            records.append(Record.model_validate(item))
        except ValidationError as e:
            raise FetchError(f"Record {i} is malformed") from e
    return records


class PatientAPIClient:
    """
    Fetches patient records, optionally filtered by gender.
    """
    def __init__(self, base_url: str, endpoint: str = DEFAULT_ENDPOINT, timeout: float = 10.0):
        self.url = base_url.rstrip("/") + "/" + endpoint.lstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def fetch(self, gender: str = ALL_GENDERS) -> RecordSet:
        """
        Fetch the record set for ``gender``. ``"All"`` is sent as-is and means no filter.
        """
        try:
            logger.debug(f"Fetching {self.url}?gender={gender}")
            resp = self.session.get(self.url, params={"gender": gender}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Network error fetching patients: {e}")
            raise FetchError(f"Connection failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            logger.error(f"Network response was not ok: {resp.status_code}")
            raise FetchError(f"Network response was not ok: {resp.status_code}", status=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchError("Response body is not valid JSON", status=resp.status_code) from e

        records = parse_records(payload)
        logger.info(f"Loaded {len(records)} records (gender={gender})")
        return records

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
