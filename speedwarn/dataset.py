"""
Reference curve dataset loading and caching.

The dataset is a JSON array of objects:

    [
        {"latitude": 12.9716, "longitude": 77.5946, "radius": 120},
        {"latitude": 12.9721, "longitude": 77.5950}
    ]

``latitude`` and ``longitude`` are required numbers. ``radius`` (metres) is
optional. Entries without usable coordinates are skipped and logged rather
than failing the whole dataset.

Lifecycle
---------
CurveDatabase loads the dataset once, on first use, and serves the same
immutable tuple afterwards. It never reloads on its own; call refresh() to
pick up a changed source. A failed load is logged and leaves the database
empty, and the next get() tries again.
"""

import json
import logging
import math
import threading
import time
from typing import Any, Iterable, List, Optional

import requests

from config import DATASET_FETCH_TIMEOUT_S, DATASET_RETRY_INTERVAL_S, DATASET_SOURCE
from speedwarn.models import CurveRecord, ReferenceDataset

logger = logging.getLogger('speedwarn.dataset')

EMPTY_DATASET: ReferenceDataset = ()


class DatasetLoadError(Exception):
    """The reference dataset could not be fetched or parsed."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    # json.load accepts NaN and Infinity, and ints too large for a float
    if not _is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


def parse_record(entry: Any, index: int = 0) -> Optional[CurveRecord]:
    """
    Convert one JSON entry into a CurveRecord.

    Returns None (and logs a warning) for malformed entries. A radius that
    is not a finite positive number is treated as missing.
    """
    if not isinstance(entry, dict):
        logger.warning("Skipping dataset entry %d: not an object", index)
        return None

    lat = entry.get('latitude')
    lon = entry.get('longitude')
    if not _is_finite_number(lat) or not _is_finite_number(lon):
        logger.warning(
            "Skipping dataset entry %d: missing or non-numeric latitude/longitude", index
        )
        return None
    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lon <= 180.0):
        logger.warning(
            "Skipping dataset entry %d: coordinates out of range (%s, %s)", index, lat, lon
        )
        return None

    radius = entry.get('radius')
    if radius is not None and (not _is_finite_number(radius) or radius <= 0):
        logger.warning(
            "Dataset entry %d has invalid radius %r, treating as unknown", index, radius
        )
        radius = None

    return CurveRecord(
        latitude=float(lat),
        longitude=float(lon),
        radius=float(radius) if radius is not None else None,
    )


def parse_records(entries: Iterable[Any]) -> ReferenceDataset:
    """Parse JSON entries into an ordered dataset, skipping malformed ones."""
    records: List[CurveRecord] = []
    skipped = 0
    for index, entry in enumerate(entries):
        record = parse_record(entry, index)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.warning("Skipped %d malformed dataset entries", skipped)
    return tuple(records)


def _read_source(source: str, timeout: float) -> Any:
    """Read and decode JSON from a file path or http(s) URL."""
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise DatasetLoadError(f"Could not fetch {source}: {e}") from e

    try:
        with open(source, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise DatasetLoadError(f"Could not read {source}: {e}") from e


def load_dataset(
    source: str = DATASET_SOURCE,
    timeout: float = DATASET_FETCH_TIMEOUT_S,
) -> ReferenceDataset:
    """
    Load the reference dataset from a path or URL.

    Args:
        source: Filesystem path or http(s) URL of the JSON array
        timeout: Network timeout in seconds (URL sources only)

    Returns:
        Tuple of CurveRecord in source order

    Raises:
        DatasetLoadError: On network, IO or JSON failure, or if the top
            level of the document is not an array
    """
    data = _read_source(source, timeout)
    if not isinstance(data, list):
        raise DatasetLoadError(
            f"Expected a JSON array in {source}, got {type(data).__name__}"
        )

    dataset = parse_records(data)
    logger.info("Loaded %d curve records from %s", len(dataset), source)
    return dataset


class CurveDatabase:
    """
    Load-once cache around the reference dataset.

    Load States
    -----------
    1. EMPTY: nothing loaded yet, or the last load failed
    2. LOADING: a background load started by load_async() is running
    3. READY: dataset loaded and cached

    get() moves EMPTY -> READY with a synchronous load. load_async() moves
    EMPTY -> LOADING; the worker stores its result in _pending and the next
    get() picks it up. A non-blocking get() after a failed load starts a new
    background load, at most once per retry_interval seconds. refresh() drops
    the cache and loads again; a background load still running at that point
    is discarded when it finishes.
    """

    def __init__(
        self,
        source: str = DATASET_SOURCE,
        timeout: float = DATASET_FETCH_TIMEOUT_S,
        retry_interval: float = DATASET_RETRY_INTERVAL_S,
        clock=time.monotonic,
    ):
        self.source = source
        self.timeout = timeout
        self.retry_interval = retry_interval
        self.last_error: Optional[str] = None

        self._clock = clock
        self._dataset: Optional[ReferenceDataset] = None
        self._pending: Optional[ReferenceDataset] = None
        self._loading_thread: Optional[threading.Thread] = None
        self._generation = 0
        self._last_attempt: Optional[float] = None

    @property
    def is_loaded(self) -> bool:
        """True once a dataset has been loaded successfully."""
        return self._dataset is not None or self._pending is not None

    @property
    def is_loading(self) -> bool:
        """True while a background load is in progress."""
        return self._loading_thread is not None and self._loading_thread.is_alive()

    def get(self, wait: bool = True) -> ReferenceDataset:
        """
        Return the cached dataset, loading it on first use.

        Args:
            wait: If False, never perform blocking I/O; return an empty
                dataset until a background load has completed. If the last
                load failed, a new background load is started once the
                retry interval has passed.

        Returns:
            The dataset, or an empty tuple if it could not be loaded
        """
        if self._pending is not None:
            self._apply_pending()

        if self._dataset is not None:
            return self._dataset

        if self.is_loading:
            return EMPTY_DATASET

        if not wait:
            if self.last_error is not None and self._retry_due():
                logger.info("Retrying dataset load from %s", self.source)
                self.load_async()
            return EMPTY_DATASET

        return self._load_sync()

    def refresh(self) -> ReferenceDataset:
        """Discard the cached dataset and load it again."""
        self._generation += 1
        self._loading_thread = None
        self._dataset = None
        self._pending = None
        return self._load_sync()

    def load_async(self) -> None:
        """Start a background load. No-op if loaded or already loading."""
        if self._dataset is not None or self.is_loading:
            return

        generation = self._generation
        self._last_attempt = self._clock()

        def load_in_background():
            try:
                dataset = load_dataset(self.source, self.timeout)
            except DatasetLoadError as e:
                logger.error("Error loading the database: %s", e)
                if generation == self._generation:
                    self.last_error = str(e)
                return

            if generation != self._generation:
                logger.debug("Discarding background load superseded by refresh()")
                return
            self._pending = dataset
            self.last_error = None

        self._loading_thread = threading.Thread(target=load_in_background, daemon=True)
        self._loading_thread.start()

    def _retry_due(self) -> bool:
        if self._last_attempt is None:
            return True
        return self._clock() - self._last_attempt >= self.retry_interval

    def _load_sync(self) -> ReferenceDataset:
        self._last_attempt = self._clock()
        try:
            self._dataset = load_dataset(self.source, self.timeout)
            self.last_error = None
            return self._dataset
        except DatasetLoadError as e:
            self.last_error = str(e)
            logger.error("Error loading the database: %s", e)
            return EMPTY_DATASET

    def _apply_pending(self) -> None:
        """Adopt the dataset produced by the background loader."""
        self._dataset = self._pending
        self._pending = None
        self._loading_thread = None
