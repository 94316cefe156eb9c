# OOP boundary for external i/o
# all http and proxy configuration live here, so the rest of the code is pure and testable
# provider keys never reach this side, the proxy at base_url adds them
# use a thread-local session per ThreadPoolExecutor worker

from __future__ import annotations
import logging
import os
import threading
from typing import Any, Dict, Mapping
import requests
from dotenv import load_dotenv

load_dotenv()  # in production, environment variables is injected by docker, kubernetes, cloud provider

logger = logging.getLogger(__name__)

class TravelAPIError(RuntimeError):
    # base type for every error raised while fetching or reading provider data
    pass

class TransportError(TravelAPIError):
    # network failure, http status >= 400 or a body that is not json
    pass

class ProviderError(TravelAPIError):
    # the proxy answered but the provider reported success: false
    # str(error) is the provider message, verbatim
    pass

class ResponseShapeError(TravelAPIError):
    # success: true, but the expected nested field or list element is missing
    pass

class TravelAPIClient:
    # this class encapsulates proxy details like base URL, timeout and headers
    DEFAULT_BASE_URL = "http://localhost:8081"
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        user_agent: str = "tripplanner/0.1",
    ):
        self.base_url = (base_url or os.getenv("TRAVEL_API_BASE_URL") or self.DEFAULT_BASE_URL).rstrip("/")
        if timeout is None:
            timeout = float(os.getenv("TRAVEL_API_TIMEOUT", self.DEFAULT_TIMEOUT))
        self.timeout = timeout
        self.user_agent = user_agent

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

    def _build_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent, "Accept": "application/json"})
        return s

    def _session(self) -> requests.Session:
        # thread-local session creation
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def get_data(self, path: str, params: Mapping[str, Any]) -> Dict[str, Any]:
        # GET base_url + path and return the decoded json body
        # the success flag is not inspected here, that is the parsers' job
        url = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", url, dict(params))

        try:
            resp = self._session().get(url, params=dict(params), timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Request to %s failed: %s", path, exc)
            raise TransportError(f"Request error for {path}: {exc}") from exc

        if resp.status_code >= 400:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            logger.warning("HTTP %s from %s", resp.status_code, path)
            raise TransportError(f"HTTP {resp.status_code} for {path}. Body: {snippet}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise TransportError(f"Unexpected body from {path}: expected a json object")
        return data
