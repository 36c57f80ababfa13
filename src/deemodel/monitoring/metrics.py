"""Metrics collection for model fetches.

Instruments are exported through OpenTelemetry; without a configured
MeterProvider they are no-ops.
"""

from typing import Dict, Optional

from deemodel.telemetry import get_meter


class ModelMetrics:
    """OpenTelemetry instruments describing Clone traffic.

    Attributes:
        meter: OpenTelemetry meter
        snapshot_counter: Snapshots fetched, by outcome
        stale_counter: Snapshots rejected for a seqnum mismatch
        rows_decoded_counter: Rows turned into records
        rows_dropped_counter: Rows discarded as placeholders or malformed
        clone_duration_histogram: Wall time of Clone calls
    """

    def __init__(self, meter_name: Optional[str] = None):
        self.meter = get_meter(meter_name) if meter_name else get_meter()
        self._setup_instruments()

    def _setup_instruments(self) -> None:
        """Create the OpenTelemetry instruments."""
        self.snapshot_counter = self.meter.create_counter(
            name="deemodel.snapshots",
            unit="1",
            description="Clone calls issued, by outcome",
        )
        self.stale_counter = self.meter.create_counter(
            name="deemodel.snapshots.stale",
            unit="1",
            description="Snapshots rejected because their seqnum was not the expected one",
        )
        self.rows_decoded_counter = self.meter.create_counter(
            name="deemodel.rows.decoded",
            unit="1",
            description="Rows decoded into records",
        )
        self.rows_dropped_counter = self.meter.create_counter(
            name="deemodel.rows.dropped",
            unit="1",
            description="Rows discarded because their length did not match the column count",
        )
        self.clone_duration_histogram = self.meter.create_histogram(
            name="deemodel.clone.duration",
            unit="s",
            description="Duration of Clone calls",
        )

    def record_clone(self, duration_seconds: float, success: bool, attributes: Dict[str, str]) -> None:
        status = "success" if success else "failure"
        self.snapshot_counter.add(1, {**attributes, "status": status})
        self.clone_duration_histogram.record(duration_seconds, {**attributes, "status": status})

    def record_stale(self, attributes: Dict[str, str]) -> None:
        self.stale_counter.add(1, attributes)

    def record_rows(self, decoded: int, dropped: int, attributes: Dict[str, str]) -> None:
        if decoded:
            self.rows_decoded_counter.add(decoded, attributes)
        if dropped:
            self.rows_dropped_counter.add(dropped, attributes)


_metrics: Optional[ModelMetrics] = None


def get_metrics() -> ModelMetrics:
    """Get the process-wide metrics collector."""
    global _metrics
    if _metrics is None:
        _metrics = ModelMetrics()
    return _metrics
