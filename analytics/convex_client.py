from __future__ import annotations

import hashlib
import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from .config import CacheConfig, cache_config_from_env
from .errors import UpstreamFetchError

logger = logging.getLogger(__name__)

RETRY_STATUS = (429, 500, 502, 503, 504)


@dataclass
class ConvexQueryClient:
    base_url: str
    auth_token: str = ""
    timeout_s: int = 30
    cache: Optional[CacheConfig] = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        self.session = requests.Session()
        self.session.headers.update(
            {
                "content-type": "application/json",
                "accept": "application/json",
            }
        )
        if self.auth_token:
            self.session.headers["authorization"] = f"Bearer {self.auth_token}"
        if self.cache is None:
            self.cache = cache_config_from_env()

    def _cache_path(self, path: str, args: Dict[str, Any]) -> Path:
        assert self.cache is not None
        key_src = json.dumps({"url": self.base_url, "path": path, "args": args}, sort_keys=True)
        digest = hashlib.sha1(key_src.encode("utf-8")).hexdigest()
        return self.cache.base_dir / f"{digest}.json"

    def query(
        self,
        path: str,
        args: Optional[Dict[str, Any]] = None,
        retries: int = 3,
        backoff_s: float = 0.6,
    ) -> Any:
        """Run a query function and return its value.

        Transport failures and 429/5xx answers are retried with a linear
        backoff. A function-level error (``status: "error"``) is not retried.
        """
        args = args or {}
        payload = {"path": path, "args": args, "format": "json"}
        cache = self.cache
        if cache and cache.enabled:
            cache_path = self._cache_path(path, args)
            if cache_path.exists():
                with cache_path.open("r", encoding="utf-8") as f:
                    return json.load(f)

        last_err: Optional[Exception] = None
        for attempt in range(retries):
            try:
                resp = self.session.post(
                    f"{self.base_url}/api/query", json=payload, timeout=self.timeout_s
                )
                if resp.status_code in RETRY_STATUS:
                    last_err = RuntimeError(f"HTTP {resp.status_code}")
                    logger.warning(
                        "Query %s returned %s (attempt %d/%d)",
                        path, resp.status_code, attempt + 1, retries,
                    )
                    time.sleep(backoff_s * (attempt + 1))
                    continue
                resp.raise_for_status()
                body = resp.json()
            except (requests.RequestException, ValueError) as exc:
                last_err = exc
                logger.warning("Query %s failed: %s (attempt %d/%d)", path, exc, attempt + 1, retries)
                time.sleep(backoff_s * (attempt + 1))
                continue

            if not isinstance(body, dict):
                raise UpstreamFetchError(
                    f"Query {path} returned {type(body).__name__}, expected a response object",
                    operation=path,
                )
            if body.get("status") != "success":
                message = body.get("errorMessage") or json.dumps(body)
                raise UpstreamFetchError(f"Query {path} failed: {message}", operation=path)

            value = body.get("value")
            if cache and cache.enabled:
                cache_path.parent.mkdir(parents=True, exist_ok=True)
                with cache_path.open("w", encoding="utf-8") as f:
                    json.dump(value, f)
            return value

        raise UpstreamFetchError(
            f"Query {path} failed after {retries} attempts. Last error: {last_err}",
            operation=path,
        )
