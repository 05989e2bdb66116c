"""HTTP transport for the Circonus API client."""

import json
import logging
from email.utils import parsedate_to_datetime
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import httpx

from .auth import CirconusAuth
from .config import CirconusConfig
from .exceptions import (
    TransportError,
    RateLimitError,
    RequestTimeoutError
)
from .resilience import RetryConfig, RetryableOperation


logger = logging.getLogger(__name__)
debug_logger = logging.getLogger("circonus_api.debug")

Body = Union[bytes, str, Dict[str, Any], None]


class CirconusAPIClient:
    """Low-level client for the Circonus REST API.

    Every call takes a resource path (``/maintenance/1234``, optionally with
    a query string) and returns the raw response body. Authentication,
    status handling and retries live here; encoding and decoding of records
    belongs to the resources built on top.

    Attributes:
        config: Circonus configuration
        auth: Authentication header provider
    """

    def __init__(
        self,
        config: CirconusConfig,
        auth: Optional[CirconusAuth] = None,
        transport: Optional[httpx.BaseTransport] = None,
        retry: Optional[RetryableOperation] = None
    ):
        """Initialize API client with configuration and authentication.

        Args:
            config: Circonus configuration containing API settings
            auth: Authentication header provider (built from config if omitted)
            transport: Optional httpx transport, used to mount a mock in tests
            retry: Optional retry wrapper (built from config if omitted)
        """
        self.config = config
        self.auth = auth or CirconusAuth(config)
        self._transport = transport
        self._http_client: Optional[httpx.Client] = None
        self.retry = retry or RetryableOperation(
            RetryConfig(
                max_retries=config.max_retries,
                base_delay=config.min_retry_delay,
                max_delay=config.max_retry_delay
            )
        )

        logger.info(
            "Initialized Circonus API client",
            extra={
                "url": self.config.url,
                "timeout": self.config.timeout,
                "max_retries": self.config.max_retries,
                "debug": self.config.debug
            }
        )

    @property
    def http_client(self) -> httpx.Client:
        """Get or create HTTP client for API requests."""
        if self._http_client is None:
            self._http_client = httpx.Client(
                timeout=httpx.Timeout(self.config.timeout),
                transport=self._transport,
                headers={
                    "User-Agent": f"{self.config.app_name} circonus-api-client",
                    "Accept": "application/json",
                    **self.auth.get_auth_headers()
                }
            )
        return self._http_client

    @property
    def debug_enabled(self) -> bool:
        return self.config.debug

    def log_line(self, line: str) -> None:
        """Write one debug line; a no-op unless debug is enabled."""
        if self.debug_enabled:
            debug_logger.info(line)

    def get(self, path: str) -> bytes:
        return self._request("GET", path)

    def put(self, path: str, body: Body) -> bytes:
        return self._request("PUT", path, body)

    def post(self, path: str, body: Body) -> bytes:
        return self._request("POST", path, body)

    def delete(self, path: str) -> bytes:
        return self._request("DELETE", path)

    def _build_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.config.url + path

    def _request(self, method: str, path: str, body: Body = None) -> bytes:
        """Make HTTP request with retries.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Resource path, optionally with a query string
            body: Request body; dicts are JSON encoded

        Returns:
            Raw response body

        Raises:
            TransportError: If request fails after all retries
            RateLimitError: If rate limit is still exceeded after all retries
            RequestTimeoutError: If request keeps timing out
        """
        url = self._build_url(path)

        if isinstance(body, dict):
            content: Optional[bytes] = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = body

        headers = {"Content-Type": "application/json"} if content is not None else None

        logger.debug(
            f"Making {method} request to {path}",
            extra={"url": url, "has_body": content is not None}
        )

        return self.retry.execute(self._execute_http_request, method, url, path, content, headers)

    def _execute_http_request(
        self,
        method: str,
        url: str,
        path: str,
        content: Optional[bytes],
        headers: Optional[Dict[str, str]]
    ) -> bytes:
        """Execute a single HTTP request and check its status."""
        try:
            response = self.http_client.request(
                method=method,
                url=url,
                content=content,
                headers=headers
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"Request to {url} timed out",
                timeout_seconds=self.config.timeout,
                operation=f"{method} {path}"
            ) from e
        except httpx.RequestError as e:
            raise TransportError(
                f"Request to {url} failed: {e}",
                context={
                    "method": method,
                    "path": path,
                    "error_type": type(e).__name__
                }
            ) from e

        logger.debug(
            "Received response",
            extra={
                "status_code": response.status_code,
                "response_size": len(response.content),
                "url": url
            }
        )

        self._handle_response_errors(response, path, method)
        return response.content

    def _handle_response_errors(
        self,
        response: httpx.Response,
        path: str,
        method: str
    ) -> None:
        """Raise for any non-2xx response.

        Raises:
            RateLimitError: If rate limited
            TransportError: For other HTTP errors
        """
        if response.is_success:
            return

        if response.status_code == 429:
            raise RateLimitError(
                f"Rate limit exceeded for {path}",
                retry_after=self._parse_retry_after(response),
                response_body=response.text,
                context={"path": path, "method": method}
            )

        error_message = f"API response code {response.status_code} for {method} {path}"

        # Circonus error bodies carry code/message/explanation
        try:
            error_data = response.json()
            if isinstance(error_data, dict) and error_data.get("message"):
                error_message = f"{error_message}: {error_data['message']}"
        except (json.JSONDecodeError, ValueError):
            if response.text:
                error_message = f"{error_message}: {response.text}"

        raise TransportError(
            error_message,
            status_code=response.status_code,
            response_body=response.text,
            context={"path": path, "method": method}
        )

    def _parse_retry_after(self, response: httpx.Response) -> Optional[float]:
        """Parse Retry-After header from rate limit response."""
        retry_after_header = response.headers.get("Retry-After")
        if not retry_after_header:
            return None

        try:
            return float(retry_after_header)
        except ValueError:
            pass

        try:
            retry_time = parsedate_to_datetime(retry_after_header)
        except (ValueError, TypeError):
            return None
        return max(0.0, (retry_time - datetime.now(timezone.utc)).total_seconds())

    def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        if self._http_client:
            self._http_client.close()
            self._http_client = None

        logger.info("Circonus API client closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
