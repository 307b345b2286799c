"""
Abstract base client for classification backends.

Defines the interface shared by the generative-chat client and the zero-shot
client. Both talk JSON over HTTP with bearer authentication through an
httpx.AsyncClient; the transport is injectable so tests (and hosts with their
own networking) can replace it.
"""

import json
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
import structlog

from auto_classifier.backends.exceptions import (
    BackendConnectionError,
    BackendResponseError,
)
from auto_classifier.monitoring.metrics import backend_latency_seconds


logger = structlog.get_logger(__name__)


class BaseBackendClient(ABC):
    """
    Abstract base class for backend clients.

    Responsibilities:
    - Build the HTTP client (base URL, bearer auth, timeout, transport)
    - Send one JSON POST per call and time it
    - Map transport failures to BackendConnectionError

    Does NOT handle:
    - Prompt construction (PromptBuilder)
    - Response validation or ranking (validation package)
    - Retries: a failed call surfaces directly to the caller
    """

    engine_name: str = "backend"

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize base client.

        Args:
            base_url: API base URL (e.g., https://api.openai.com/v1)
            api_key: Bearer token; the header is omitted when empty
            timeout: Request timeout in seconds
            transport: Optional httpx transport (MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.debug(
            "Initialized backend client",
            client_class=self.__class__.__name__,
            base_url=self.base_url,
            timeout=timeout,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=self._headers(),
                transport=self._transport,
                follow_redirects=True,
            )
        return self._client

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        """
        POST a JSON payload and return the raw response.

        Status codes are NOT checked here; each client decides what counts
        as success and how to extract error details.

        Raises:
            BackendConnectionError: Network error or timeout
        """
        start_time = time.time()
        client = await self._get_client()
        try:
            response = await client.post(path, json=payload)
        except httpx.TimeoutException as e:
            self._observe_latency(start_time, success=False)
            logger.error(
                "Backend request timeout",
                engine=self.engine_name,
                path=path,
                timeout=self.timeout,
                error=str(e),
            )
            raise BackendConnectionError(
                f"{self.engine_name} request timed out after {self.timeout}s",
                details={"path": path, "timeout": self.timeout},
            ) from e
        except httpx.TransportError as e:
            self._observe_latency(start_time, success=False)
            logger.error(
                "Backend network error",
                engine=self.engine_name,
                path=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise BackendConnectionError(
                f"Network error calling {self.engine_name}: {e}",
                details={"path": path, "error_type": type(e).__name__},
            ) from e

        self._observe_latency(start_time, success=response.is_success)
        logger.debug(
            "Backend response received",
            engine=self.engine_name,
            path=path,
            status_code=response.status_code,
            latency_ms=int((time.time() - start_time) * 1000),
        )
        return response

    def _observe_latency(self, start_time: float, success: bool) -> None:
        backend_latency_seconds.labels(
            engine=self.engine_name, success=str(success).lower()
        ).observe(time.time() - start_time)

    def _parse_json_body(self, response: httpx.Response) -> Any:
        """Decode a success body, mapping malformed JSON to BackendResponseError."""
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(
                "Backend returned a non-JSON success body",
                engine=self.engine_name,
                status_code=response.status_code,
                body=response.text[:2000],
            )
            raise BackendResponseError(
                f"Invalid JSON response from {self.engine_name}",
                details={"parse_error": str(e), "body": response.text[:2000]},
            ) from e

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check that the backend accepts a minimal request with the configured
        credentials.

        Returns:
            True if the probe call succeeded, False otherwise

        Note:
            This should NOT raise exceptions - return False on error.
        """
        pass

    async def close(self):
        """Close the HTTP client connection."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed backend client", client_class=self.__class__.__name__)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s)"
        )
