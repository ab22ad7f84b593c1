import logging
from typing import Any, Dict, List, Optional

import requests

from finanalyzer.config import settings
from finanalyzer.errors import ProxyError

logger = logging.getLogger(__name__)


class ProxyClient:
    """Talks to the /api/analyze proxy the same way the browser does."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url or settings.PROXY_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PROXY_TIMEOUT
        self.http = requests.Session()

    def analyze(self, messages: List[Dict[str, Any]], system: Optional[str] = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"messages": messages}
        if system:
            payload["system"] = system

        try:
            response = self.http.post(
                f"{self.base_url}/api/analyze",
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Proxy request failed: %s", e)
            raise ProxyError(str(e)) from e

        if not response.ok:
            logger.warning("Proxy answered %s: %s", response.status_code, response.text[:200])
            raise ProxyError(f"API Error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProxyError(f"Invalid JSON from proxy: {e}") from e
