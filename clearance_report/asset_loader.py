"""Asset Loader Module

Fetches branding images and item photographs before layout starts. Every
fetch is bounded by a timeout and resolves either to bytes or to the
USE_PLACEHOLDER sentinel; failures never propagate.
"""
import base64
import binascii
import logging
import os
from concurrent.futures import ThreadPoolExecutor, wait
from functools import lru_cache
from typing import Dict, Optional, Union

import requests

from .config import ASSET_MAX_WORKERS, ASSET_TIMEOUT_SECONDS, STATIC_ASSET_KEYS
from .exceptions import AssetLoadError
from .models import AssetRef

logger = logging.getLogger(__name__)


class _Placeholder:
    """Sentinel meaning "draw the placeholder for this asset"."""

    def __repr__(self):
        return "USE_PLACEHOLDER"

    def __bool__(self):
        return False


USE_PLACEHOLDER = _Placeholder()

AssetResult = Union[bytes, _Placeholder]


@lru_cache(maxsize=32)
def load_static_asset(path: str) -> bytes:
    """
    Read a static branding file, caching it for the life of the process.

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, "rb") as f:
        return f.read()


class AssetLoader:
    """Resolves asset references to bytes with a bounded timeout.

    Supported references:
    - bytes: returned as-is
    - data URIs (``data:image/png;base64,...``)
    - http(s) URLs, fetched with requests
    - filesystem paths
    """

    def __init__(
        self,
        timeout: float = ASSET_TIMEOUT_SECONDS,
        max_workers: int = ASSET_MAX_WORKERS,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the loader.

        Args:
            timeout: Seconds allowed for a single fetch and for a whole batch
            max_workers: Threads used by ``fetch_all``
            session: Optional requests session (connection reuse, test doubles)
        """
        self.timeout = timeout
        self.max_workers = max_workers
        self.session = session

    def load(self, key: str, ref: AssetRef) -> bytes:
        """
        Resolve a single reference to bytes.

        Args:
            key: Asset identity used in errors and logs
            ref: Asset reference

        Returns:
            Raw asset bytes

        Raises:
            AssetLoadError: If the asset cannot be resolved
        """
        if isinstance(ref, (bytes, bytearray)):
            if not ref:
                raise AssetLoadError(key, "empty data")
            return bytes(ref)

        if not isinstance(ref, str) or not ref.strip():
            raise AssetLoadError(key, f"unsupported reference type {type(ref).__name__}")

        ref = ref.strip()
        if ref.startswith("data:"):
            return self._decode_data_uri(key, ref)
        if ref.startswith(("http://", "https://")):
            return self._download(key, ref)
        return self._read_file(key, ref)

    def fetch(self, key: str, ref: Optional[AssetRef]) -> AssetResult:
        """Resolve a reference, mapping any failure to USE_PLACEHOLDER."""
        if ref is None:
            return USE_PLACEHOLDER
        try:
            return self.load(key, ref)
        except AssetLoadError as e:
            logger.warning("Asset %s unavailable, using placeholder: %s", key, e.reason)
            return USE_PLACEHOLDER

    def fetch_all(self, refs: Dict[str, Optional[AssetRef]]) -> Dict[str, AssetResult]:
        """
        Resolve many references concurrently.

        The whole batch is bounded by ``timeout``; assets still pending
        when it expires resolve to USE_PLACEHOLDER and their results are
        discarded.

        Args:
            refs: Asset key -> reference (None for "no asset")

        Returns:
            Asset key -> bytes or USE_PLACEHOLDER, for every key in ``refs``
        """
        results: Dict[str, AssetResult] = {key: USE_PLACEHOLDER for key in refs}
        pending = {key: ref for key, ref in refs.items() if ref is not None}
        if not pending:
            return results

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            future_to_key = {
                executor.submit(self.fetch, key, ref): key
                for key, ref in pending.items()
            }
            done, not_done = wait(future_to_key, timeout=self.timeout)

            for future in done:
                results[future_to_key[future]] = future.result()
            for future in not_done:
                future.cancel()
                logger.warning(
                    "Asset %s timed out after %.0fs, using placeholder",
                    future_to_key[future], self.timeout,
                )
        finally:
            # Do not block on stragglers; their results are discarded
            executor.shutdown(wait=False)

        return results

    def _decode_data_uri(self, key: str, ref: str) -> bytes:
        header, _, data = ref.partition(",")
        if not data:
            raise AssetLoadError(key, "data URI has no payload")
        if ";base64" not in header:
            raise AssetLoadError(key, "only base64 data URIs are supported")
        try:
            return base64.b64decode(data, validate=False)
        except (binascii.Error, ValueError) as e:
            raise AssetLoadError(key, f"invalid base64 data: {e}")

    def _download(self, key: str, url: str) -> bytes:
        getter = self.session.get if self.session is not None else requests.get
        try:
            response = getter(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise AssetLoadError(key, f"download failed: {e}")
        if not response.content:
            raise AssetLoadError(key, "download returned no data")
        return response.content

    def _read_file(self, key: str, path: str) -> bytes:
        if not os.path.exists(path):
            raise AssetLoadError(key, f"file not found: {path}")
        try:
            if key in STATIC_ASSET_KEYS:
                return load_static_asset(os.path.abspath(path))
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise AssetLoadError(key, f"could not read {path}: {e}")
