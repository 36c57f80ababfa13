from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from deemodel.common.exceptions import DeeModelError, configuration_error
from deemodel.constants import MODEL_INTERFACE
from deemodel.logging import get_logger, model_context
from deemodel.model.address import model_object_path
from deemodel.model.fetcher import fetch_snapshot
from deemodel.model.rows import decode_rows, extract_valid_rows
from deemodel.model.validator import validate_seqnum
from deemodel.monitoring import ModelMetrics, get_metrics
from deemodel.protocols import BusProtocol
from deemodel.settings import DeeModelSettings, get_settings
from deemodel.types import ModelSchema, ModelSnapshot, Record
from deemodel.utils.decorators import traced

logger = get_logger(__name__)


class DeeModel:
    """A remote Dee model object on D-Bus.

    Each call to ``get`` fetches a full snapshot with ``Clone`` and decodes
    it; nothing is cached between calls, and overlapping calls may observe
    different seqnums.

    Args:
        bus: Connected bus implementing BusProtocol (mandatory)
        service_name: Bus name publishing the model (mandatory). The object
            path is derived from it.
        schema: Mapping from column index of the raw model to the name
            that column gets in decoded records (mandatory)
        settings: Settings to use instead of the shared ones
        metrics: Metrics collector to use instead of the shared one

    Raises:
        DeeModelError: CONFIG_MISSING if a mandatory parameter is None,
            CONFIG_INVALID if the service name or schema is malformed.
            Raised before any bus traffic.

    Example:
        >>> bus = await connect_bus()
        >>> model = DeeModel(
        ...     bus,
        ...     "com.canonical.Unity.Lens.Files.T1",
        ...     {0: "uri", 4: "display_name"},
        ... )
        >>> records = await model.get()
    """

    def __init__(
        self,
        bus: BusProtocol,
        service_name: str,
        schema: Union[ModelSchema, Mapping[int, str]],
        *,
        settings: Optional[DeeModelSettings] = None,
        metrics: Optional[ModelMetrics] = None,
    ):
        for parameter, value in (("bus", bus), ("service_name", service_name), ("schema", schema)):
            if value is None:
                raise configuration_error(
                    f"parameter {parameter} is mandatory",
                    parameter=parameter,
                    missing=True,
                )
        if not isinstance(service_name, str):
            raise configuration_error(
                f"parameter service_name must be a string, got {type(service_name).__name__}",
                parameter="service_name",
            )

        if isinstance(schema, ModelSchema):
            self.schema = schema
        else:
            try:
                self.schema = ModelSchema.from_mapping(schema)
            except ValidationError as e:
                raise configuration_error(
                    "parameter schema is invalid",
                    parameter="schema",
                    cause=e,
                ) from e

        self.settings = settings or get_settings()
        self._metrics = metrics or get_metrics()
        self.service_name = service_name
        self.object_path = model_object_path(service_name)
        self._proxy = bus.get_object(service_name, self.object_path, MODEL_INTERFACE)

    def __repr__(self) -> str:
        return f"DeeModel(service_name={self.service_name!r}, columns={self.schema.names!r})"

    def _span_attributes(self, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        return {
            "deemodel.service_name": self.service_name,
            "deemodel.object_path": self.object_path,
        }

    async def get(self, expected_seqnum: Optional[int] = None) -> List[Record]:
        """Fetch the current rows of the model.

        Args:
            expected_seqnum: If given, the snapshot must have been taken at
                this seqnum

        Returns:
            One record per valid row, in model order. A record maps each
            schema column name to an int, float, str or None.

        Raises:
            DeeModelError: STALE_SNAPSHOT on a seqnum mismatch, a CONNECTION_*
                code if the Clone call failed
        """
        snapshot = await self.get_snapshot(expected_seqnum)
        return snapshot.records

    @traced(span_name="deemodel.model.get", attribute_getter=lambda self, *a, **k: self._span_attributes())
    async def get_snapshot(self, expected_seqnum: Optional[int] = None) -> ModelSnapshot:
        """Fetch the current rows of the model along with snapshot metadata.

        Same as ``get`` but also returns the swarm name, seqnums and column
        types of the snapshot the records were decoded from.
        """
        labels = {"service_name": self.service_name}

        with model_context(self.service_name, self.object_path):
            raw = await fetch_snapshot(
                self._proxy,
                timeout=self.settings.clone_timeout_seconds,
                service_name=self.service_name,
                object_path=self.object_path,
                metrics=self._metrics,
            )

            try:
                validate_seqnum(expected_seqnum, raw)
            except DeeModelError:
                self._metrics.record_stale(labels)
                raise

            valid_rows = extract_valid_rows(raw.field_count, raw.rows)
            records = decode_rows(self.schema, valid_rows)
            self._metrics.record_rows(len(records), len(raw.rows) - len(valid_rows), labels)

            logger.info(
                "Decoded %d records from %s at seqnum %d",
                len(records), raw.swarm_name, raw.seqnum_after,
            )

        return ModelSnapshot(
            swarm_name=raw.swarm_name,
            seqnum=raw.seqnum_after,
            seqnum_before=raw.seqnum_before,
            column_types=raw.column_types,
            records=records,
        )


def create(
    bus: BusProtocol,
    service_name: str,
    schema: Union[ModelSchema, Mapping[int, str]],
    **kwargs: Any,
) -> DeeModel:
    """Create a DeeModel accessor. See DeeModel for the arguments."""
    return DeeModel(bus, service_name, schema, **kwargs)
