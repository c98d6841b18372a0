#!/usr/bin/env python3
"""
API Client Module

HTTP client for the provider's per-domain record collection
(`{base_url}{domain}/records`). One client per domain, bearer-token
authenticated, closed when the domain is done.

License: MIT
"""

################################################################################
# IMPORTS & DEPENDENCIES
################################################################################

# Standard library imports
import logging
from typing import Optional, Dict, Any

# Third-party imports
import requests

# Internal imports
from .exceptions import APIError
from .models import DomainRecord, RecordList

################################################################################
# HTTP CLIENT CLASS - API Communication
################################################################################

class HTTPClient:
    """Session-backed HTTP client that raises APIError on any failure."""

    def __init__(self, base_url: Optional[str] = None, timeout: int = 30,
                 headers: Optional[Dict[str, str]] = None, logger: Optional[Any] = None) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger if logger else logging.getLogger(__name__)

        self._session = requests.Session()
        if headers:
            self._session.headers.update(headers)

    def build_url(self, endpoint: str) -> str:
        if not self.base_url:
            return endpoint
        return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    def request(self, method: str, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> requests.Response:
        """Send one request. Transport errors and non-2xx statuses raise APIError."""
        url = self.build_url(endpoint)
        method = method.upper()

        try:
            if method == "GET":
                response = self._session.get(url, timeout=self.timeout)
            elif method == "POST":
                response = self._session.post(url, json=json_data, timeout=self.timeout)
            elif method == "PUT":
                response = self._session.put(url, json=json_data, timeout=self.timeout)
            elif method == "DELETE":
                response = self._session.delete(url, timeout=self.timeout)
            else:
                raise ValueError(f"Unsupported HTTP method: {method}")
        except requests.exceptions.RequestException as e:
            raise APIError(f"{method} {url} failed: {e}") from e

        self.logger.debug(f"{method} {url} - Status: {response.status_code}")

        if not response.ok:
            raise APIError(
                f"{method} {url} returned {response.status_code}: {response.text}",
                status_code=response.status_code,
                response_text=response.text,
            )
        return response

    def request_json(self, method: str, endpoint: str, json_data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Send one request and decode the JSON body."""
        response = self.request(method, endpoint, json_data=json_data)
        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"{method} {endpoint} returned invalid JSON: {e}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

    ################################################################################
    # HTTP METHOD CONVENIENCE WRAPPERS
    ################################################################################

    def get(self, endpoint: str) -> Dict[str, Any]:
        return self.request_json("GET", endpoint)

    def post(self, endpoint: str, json_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.request_json("POST", endpoint, json_data=json_data)

    def put(self, endpoint: str, json_data: Dict[str, Any]) -> Dict[str, Any]:
        return self.request_json("PUT", endpoint, json_data=json_data)

    def delete(self, endpoint: str) -> None:
        self.request("DELETE", endpoint)

    def close(self) -> None:
        self._session.close()

################################################################################
# PROVIDER DNS API CLIENT - Domain Record Management
################################################################################

class DomainRecordsClient:
    """Provider API client for one API key: list, create, update and delete records."""

    def __init__(self, api_key: str, base_url: str, timeout: int = 30, logger: Optional[Any] = None) -> None:
        self.logger = logger if logger else logging.getLogger(__name__)
        self.client = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "Authorization": f"Bearer {api_key}",
            },
            logger=self.logger,
        )

    def __enter__(self) -> "DomainRecordsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def list_records(self, domain: str) -> RecordList:
        """Fetch all records of a domain."""
        payload = self.client.get(f"{domain}/records")
        if not isinstance(payload, dict):
            raise APIError(f"Unexpected record list for {domain}: expected an object, got {type(payload).__name__}")
        items = payload.get("domain_records") or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise APIError(f"Unexpected 'domain_records' for {domain}: expected a list of objects")

        records = RecordList.from_dict(payload)
        self.logger.debug(f"Retrieved {len(records)} records for {domain}")
        return records

    def create_record(self, domain: str, record: DomainRecord) -> DomainRecord:
        """Create a record; returns the provider's copy including its id."""
        payload = self.client.post(f"{domain}/records", json_data=record.to_dict())
        return DomainRecord.from_dict(self._unwrap(payload))

    def update_record(self, domain: str, record: DomainRecord) -> DomainRecord:
        """Update a record identified by its body."""
        payload = self.client.put(f"{domain}/records", json_data=record.to_dict())
        return DomainRecord.from_dict(self._unwrap(payload))

    def delete_record(self, domain: str, record_id: int) -> None:
        """Delete a record by id. No body is expected back."""
        self.client.delete(f"{domain}/records/{record_id}")

    @staticmethod
    def _unwrap(payload: Any) -> Dict[str, Any]:
        # The provider wraps single records as {"domain_record": {...}}
        if not isinstance(payload, dict):
            raise APIError(f"Unexpected record response: expected an object, got {type(payload).__name__}")
        if "domain_record" in payload:
            if not isinstance(payload["domain_record"], dict):
                raise APIError("Unexpected 'domain_record' in response: expected an object")
            return payload["domain_record"]
        return payload
