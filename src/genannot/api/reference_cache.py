"""Local cache for remote reference datasets.

ARCHITECTURE:
    Dataset URL + cache key → cache directory → list of raw text lines

Fetches a flat-file reference dataset (gene locations, HPO annotations, OMIM
morbid map) once and serves it from disk on every later call.

Key Design:
- Existing cache files are returned verbatim without touching the network
- Downloads are read once into a buffer; the same buffer is written and returned
- Writes go through a temporary file and an atomic rename, so concurrent
  first-time loaders never see a half-written cache file
- Explicit timeout and retry with exponential backoff (tenacity)
- Local paths and file:// URLs are accepted as sources for offline mirrors
"""

import io
import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import urlparse

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from genannot.exceptions import FormatError, IOFailure

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split on \\n, \\r\\n and \\r only.

    Other Unicode line boundaries (form feed, U+2028, ...) stay inside the line.
    """
    return [line.rstrip("\n") for line in io.StringIO(text, newline=None)]


class ReferenceCache:
    """Download-once cache for reference datasets.

    Each dataset is stored as one file named after its cache key inside a
    shared cache directory.
    """

    CACHE_DIR = Path.home() / ".cache" / "genannot"
    DEFAULT_TIMEOUT = 60.0

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 3,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the reference cache.

        Args:
            cache_dir: Directory holding cached datasets. Defaults to ~/.cache/genannot
            timeout: Request timeout in seconds
            max_retries: Maximum number of download attempts
            client: Optional preconfigured httpx client (not closed by the cache)
        """
        self.cache_dir = Path(cache_dir) if cache_dir is not None else self.CACHE_DIR
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self._client = client

    def path_for(self, cache_key: str) -> Path:
        """Return the cache file location for a key."""
        return self.cache_dir / cache_key

    def is_cached(self, cache_key: str) -> bool:
        """Check if a dataset is already present in the cache."""
        return self.path_for(cache_key).is_file()

    def clear(self, cache_key: str) -> bool:
        """Remove a cached dataset. Returns True if a file was removed."""
        path = self.path_for(cache_key)
        if path.is_file():
            path.unlink()
            logger.info("Removed cached dataset %s", path)
            return True
        return False

    def fetch(self, source_location: str, cache_key: str) -> list[str]:
        """Return the lines of a dataset, downloading it on first use.

        Args:
            source_location: URL, file:// URL or local path of the dataset
            cache_key: File name used for the cached copy

        Returns:
            The dataset as a list of lines without line terminators

        Raises:
            IOFailure: If there is no cached copy and the source is unreachable
            FormatError: If the cached copy or local source is not valid UTF-8
        """
        cache_path = self.path_for(cache_key)

        if cache_path.is_file():
            logger.debug("Cache hit for %s at %s", cache_key, cache_path)
            try:
                return split_lines(cache_path.read_text(encoding="utf-8"))
            except UnicodeDecodeError as e:
                raise FormatError(
                    f"cached dataset {cache_path} is not valid UTF-8: {e}", dataset=cache_key
                ) from e
            except OSError as e:
                raise IOFailure(
                    f"Failed to read cached dataset {cache_path}: {e}",
                    source=source_location,
                    cache_key=cache_key,
                ) from e

        logger.info("Cache miss for %s, fetching %s", cache_key, source_location)
        try:
            text = self._read_source(source_location)
        except UnicodeDecodeError as e:
            raise FormatError(
                f"source {source_location} is not valid UTF-8: {e}", dataset=cache_key
            ) from e
        except (httpx.HTTPError, OSError) as e:
            raise IOFailure(
                f"Failed to fetch {source_location}: {e}",
                source=source_location,
                cache_key=cache_key,
            ) from e

        lines = split_lines(text)
        self._write_cache(cache_path, lines, source_location)
        logger.info("Cached %d lines for %s", len(lines), cache_key)
        return lines

    def _read_source(self, source_location: str) -> str:
        """Read the full text of a source, local or remote."""
        local_path = self._local_path(source_location)
        if local_path is not None:
            return local_path.read_text(encoding="utf-8")

        retrying = Retrying(
            retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=2, max=10),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return self._download(source_location)

        raise IOFailure(f"No download attempt was made for {source_location}")

    def _download(self, url: str) -> str:
        """Download a remote resource in full."""
        if self._client is not None:
            response = self._client.get(url)
            response.raise_for_status()
            return response.text

        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.text

    def _write_cache(self, cache_path: Path, lines: list[str], source_location: str) -> None:
        """Persist lines atomically using a temp file and rename."""
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=cache_path.parent,
                prefix=f".{cache_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                for line in lines:
                    tmp.write(line + "\n")
                tmp_path = Path(tmp.name)

            # Atomic rename; a concurrent loader writing the same key wins or loses whole
            os.replace(tmp_path, cache_path)
        except OSError as e:
            raise IOFailure(
                f"Failed to write cache file {cache_path}: {e}",
                source=source_location,
                cache_key=cache_path.name,
            ) from e

    @staticmethod
    def _local_path(source_location: str) -> Path | None:
        parsed = urlparse(source_location)
        if parsed.scheme == "file":
            return Path(parsed.path)
        if parsed.scheme in ("", None) or len(parsed.scheme) == 1:
            # No scheme, or a Windows drive letter
            return Path(source_location)
        return None
