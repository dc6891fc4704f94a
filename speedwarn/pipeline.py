"""Advisory pipeline: one position update in, one Advisory out."""

import logging
from typing import Iterable, Optional

from speedwarn.conversions import mps_to_kmh
from speedwarn.dataset import CurveDatabase
from speedwarn.matcher import find_nearest
from speedwarn.models import Advisory, CurveRecord, GeoReading
from speedwarn.safety import evaluate

logger = logging.getLogger('speedwarn.pipeline')


def run_pipeline(
    reading: GeoReading,
    dataset: Iterable[CurveRecord],
    dataset_error: Optional[str] = None,
) -> Advisory:
    """Match a reading against a dataset and build its Advisory."""
    speed_kmh = mps_to_kmh(reading.speed_mps)
    match = find_nearest(reading, dataset)
    result = evaluate(match, speed_kmh)

    return Advisory(
        speed_kmh=speed_kmh,
        distance_km=result.distance_km,
        radius=result.radius,
        safe_speed_kmh=result.safe_speed_kmh,
        warning=result.warning,
        reading=reading,
        dataset_error=dataset_error,
    )


class AdvisoryPipeline:
    """
    Runs the advisory pipeline once per position update.

    The pipeline keeps no state between updates apart from the curve
    database, which loads once and is read-only afterwards. A dataset that
    fails to load degrades every advisory to "no match" instead of raising.
    """

    def __init__(self, database: CurveDatabase, block_on_load: bool = True):
        """
        Args:
            database: Curve database to match against
            block_on_load: If False, updates never wait for the dataset; they
                see "no match" until a background load has finished
        """
        self.database = database
        self.block_on_load = block_on_load

    def on_position_update(self, reading: GeoReading) -> Advisory:
        """Compute the Advisory for one position fix."""
        dataset = self.database.get(wait=self.block_on_load)

        dataset_error = None
        if not dataset and self.database.last_error:
            dataset_error = self.database.last_error
            logger.debug("Dataset unavailable, advisory degraded: %s", dataset_error)

        advisory = run_pipeline(reading, dataset, dataset_error)
        if advisory.warning:
            logger.info(
                "Speed %.0f km/h exceeds safe speed %.0f km/h (radius %.0f m)",
                advisory.speed_kmh, advisory.safe_speed_kmh, advisory.radius,
            )
        return advisory
