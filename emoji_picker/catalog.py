import json
import logging
import os
import tempfile
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import requests

from emoji_picker.config import (
    CATEGORIES,
    EMOJI_DATA_PATH,
    EMOJI_SOURCE_URL,
    FETCH_TIMEOUT,
    ORDERED_NAMES_PATH,
    ORDERED_NAMES_URL,
)
from emoji_picker.errors import CatalogLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmojiEntry:
    name: str
    keywords: Tuple[str, ...]
    char: str
    fitzpatrick_scale: bool
    category: Optional[str]

    @classmethod
    def from_json(cls, name: str, data: dict) -> "EmojiEntry":
        # categories are passed through as-is, unknown ones included
        return cls(
            name=name,
            keywords=tuple(data.get("keywords") or ()),
            char=data.get("char") or "",
            fitzpatrick_scale=bool(data.get("fitzpatrick_scale", False)),
            category=data.get("category"),
        )


def fetch_dataset(url: str, timeout: float = FETCH_TIMEOUT) -> bytes:
    """Download a dataset file, returning the raw response body."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise CatalogLoadError(f"Failed to fetch {url}: {e}") from e
    return response.content


def write_cache(path: Path, body: bytes):
    """Write ``body`` to ``path`` via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(body)
        os.replace(tmp_name, path)
    except OSError:
        os.unlink(tmp_name)
        raise


def parse_emojis(body: bytes) -> Dict[str, EmojiEntry]:
    """Parse an emojilib ``emojis.json`` body, raising ValueError on the wrong shape."""
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected an object of emojis, got {type(data).__name__}")

    emojis = {}
    for name, entry in data.items():
        if not isinstance(entry, dict):
            raise ValueError(f"emoji {name!r} is not an object")
        emojis[name] = EmojiEntry.from_json(name, entry)
    return emojis


def parse_ordered_names(body: bytes) -> List[str]:
    names = json.loads(body)
    if not isinstance(names, list):
        raise ValueError(f"expected a list of names, got {type(names).__name__}")
    return [str(name) for name in names]


class EmojiCatalog:
    """Owns the emoji dataset: cache-or-fetch loading plus category lookups.

    Loading happens once per instance. ``load()`` is guarded by a lock so
    concurrent first callers share a single fetch.
    """

    def __init__(
        self,
        data_path: Union[str, Path] = EMOJI_DATA_PATH,
        source_url: str = EMOJI_SOURCE_URL,
        ordered_path: Optional[Union[str, Path]] = ORDERED_NAMES_PATH,
        ordered_url: Optional[str] = ORDERED_NAMES_URL,
        timeout: float = FETCH_TIMEOUT,
        refresh: bool = False,
    ):
        self.data_path = Path(data_path)
        self.source_url = source_url
        self.ordered_path = Path(ordered_path) if ordered_path else None
        self.ordered_url = ordered_url or None
        self.timeout = timeout
        self.refresh = refresh

        self._lock = threading.Lock()
        self._loaded = False
        self._emojis: Dict[str, EmojiEntry] = {}
        self._ordered_names: List[str] = []

    @property
    def loaded(self) -> bool:
        return self._loaded

    def _read_or_fetch(self, path: Path, url: Optional[str], parse):
        """Parse the cached file at ``path``, fetching it from ``url`` when missing.

        A fetched body is only written to the cache once ``parse`` accepts it.
        With ``refresh`` set the cache is skipped and replaced on success.
        """
        if not (self.refresh and url):
            try:
                return parse(path.read_bytes())
            except FileNotFoundError:
                pass
            except OSError as e:
                raise CatalogLoadError(f"Could not read {path}: {e}", path=path) from e
            except ValueError as e:
                raise CatalogLoadError(f"Corrupt data in {path}: {e}", path=path) from e

        if url is None:
            return None

        # doesn't exist, grab it from the source and cache it
        logger.info(f"Fetching {path.name} from {url}...")
        body = fetch_dataset(url, self.timeout)
        try:
            data = parse(body)
        except ValueError as e:
            raise CatalogLoadError(f"{url} returned unusable data: {e}") from e

        try:
            write_cache(path, body)
        except OSError as e:
            raise CatalogLoadError(f"Could not write cache {path}: {e}", path=path) from e
        logger.info(f"Cached {url} to {path}")
        return data

    def _load_ordered_names(self) -> List[str]:
        if self.ordered_path is None:
            return []

        try:
            names = self._read_or_fetch(self.ordered_path, self.ordered_url, parse_ordered_names)
        except CatalogLoadError as e:
            # the ordered list is optional, only a broken local copy is fatal
            if e.path is not None and self.ordered_path.exists() and not self.refresh:
                raise
            logger.warning(f"Ordered emoji list unavailable, using dataset order: {e}")
            return []
        return names or []

    def load(self) -> Dict[str, EmojiEntry]:
        """Return the base catalog, reading the cache or fetching it on first call."""
        if self._loaded:
            return self._emojis

        with self._lock:
            if not self._loaded:
                emojis = self._read_or_fetch(self.data_path, self.source_url or None, parse_emojis)
                if emojis is None:
                    raise CatalogLoadError(f"No emoji data at {self.data_path} and no source URL to fetch from")
                ordered = self._load_ordered_names()

                self._emojis = emojis
                self._ordered_names = ordered
                self._loaded = True
                logger.info(f"Loaded {len(emojis)} emojis from {self.data_path}")
        return self._emojis

    def ensure_available(self) -> "EmojiCatalog":
        self.load()
        return self

    def categories(self) -> List[Tuple[str, str]]:
        return list(CATEGORIES)

    def ordered_names(self) -> List[str]:
        self.load()
        return list(self._ordered_names)

    def get(self, name: str) -> Optional[EmojiEntry]:
        return self.load().get(name)

    def grouped(self, emojis: Optional[Dict[str, EmojiEntry]] = None) -> List[Tuple[str, str, List[EmojiEntry]]]:
        """Group ``emojis`` (default: the base catalog) by category in display order.

        Within a category entries follow ``ordered_names()`` first, then the
        dataset order. Entries outside the known categories are left out.
        """
        if emojis is None:
            emojis = self.load()
        else:
            self.load()

        names = list(dict.fromkeys(name for name in self._ordered_names if name in emojis))
        seen = set(names)
        names.extend(name for name in emojis if name not in seen)

        groups = {key: [] for key, _ in CATEGORIES}
        for name in names:
            entry = emojis[name]
            if entry.category in groups:
                groups[entry.category].append(entry)
            else:
                logger.debug(f"Skipping {name!r} with unknown category {entry.category!r}")

        return [(key, label, groups[key]) for key, label in CATEGORIES]
