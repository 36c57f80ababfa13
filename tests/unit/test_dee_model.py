"""Unit tests for the DeeModel accessor."""

import asyncio
from unittest.mock import Mock

import pytest

from deemodel import DeeModel, create
from deemodel.common.exceptions import DeeModelError, ErrorCode
from deemodel.constants import MODEL_INTERFACE
from deemodel.monitoring import ModelMetrics
from deemodel.settings import DeeModelSettings
from deemodel.types import ModelSchema

from conftest import FakeBus, FakeRemoteObject, clone_reply

SERVICE = "com.example.Model"
OBJECT_PATH = "/com/canonical/dee/model/com/example/Model"


@pytest.fixture
def metrics():
    return Mock(spec=ModelMetrics)


def make_model(remote, settings, metrics, schema=None):
    bus = FakeBus(remote)
    model = DeeModel(bus, SERVICE, schema or {0: "id", 2: "name"}, settings=settings, metrics=metrics)
    return model, bus


class TestDeeModelConstruction:

    def test_binds_model_object_on_the_bus(self, fake_bus, settings):
        model = DeeModel(fake_bus, SERVICE, {0: "id"}, settings=settings)

        assert fake_bus.bound == [(SERVICE, OBJECT_PATH, MODEL_INTERFACE)]
        assert model.object_path == OBJECT_PATH
        assert model.service_name == SERVICE
        assert model.schema.names == ["id"]

    def test_construction_sends_nothing(self, fake_bus, settings):
        DeeModel(fake_bus, SERVICE, {0: "id"}, settings=settings)
        assert fake_bus.remote.calls == []

    @pytest.mark.parametrize("missing", ["bus", "service_name", "schema"])
    def test_missing_parameter_is_configuration_error(self, missing, fake_bus, settings):
        args = {"bus": fake_bus, "service_name": SERVICE, "schema": {0: "id"}}
        args[missing] = None

        with pytest.raises(DeeModelError) as exc_info:
            create(args["bus"], args["service_name"], args["schema"], settings=settings)

        error = exc_info.value
        assert error.error_code == ErrorCode.CONFIG_MISSING
        assert error.is_configuration_error
        assert error.message == f"parameter {missing} is mandatory"
        assert error.details == {"parameter": missing}
        assert fake_bus.bound == []
        assert fake_bus.remote.calls == []

    @pytest.mark.parametrize("schema", [
        {-1: "id"},
        {0: "id", 1: "id"},
        {0: 42},
        ["id", "name"],
    ])
    def test_invalid_schema_is_configuration_error(self, schema, fake_bus, settings):
        with pytest.raises(DeeModelError) as exc_info:
            DeeModel(fake_bus, SERVICE, schema, settings=settings)

        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID
        assert fake_bus.bound == []

    def test_non_string_service_name_is_configuration_error(self, fake_bus, settings):
        with pytest.raises(DeeModelError) as exc_info:
            DeeModel(fake_bus, 42, {0: "id"}, settings=settings)

        assert exc_info.value.error_code == ErrorCode.CONFIG_INVALID

    def test_accepts_prebuilt_schema(self, fake_bus, settings):
        schema = ModelSchema.from_mapping({3: "c", 1: "a"})
        model = DeeModel(fake_bus, SERVICE, schema, settings=settings)

        assert model.schema is schema
        assert list(model.schema.items()) == [(1, "a"), (3, "c")]


class TestDeeModelGet:

    def test_end_to_end_decoding(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(
            ["s", "s", "s"],
            [["1", "x", "Alice"], [], ["bad"], ["2", "y", "Bob"]],
        ))
        model, _ = make_model(remote, settings, metrics)

        records = asyncio.run(model.get())

        assert records == [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}]
        assert remote.calls == [("Clone", ())]
        metrics.record_rows.assert_called_once_with(2, 2, {"service_name": SERVICE})

    def test_zero_columns_always_yield_no_records(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply([], [["1"], [], ["2", "3"]]))
        model, _ = make_model(remote, settings, metrics)

        assert asyncio.run(model.get()) == []

    def test_expected_seqnum_matches(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(["s", "s", "s"], [["1", "a", "b"]], seqnum_after=7))
        model, _ = make_model(remote, settings, metrics)

        assert asyncio.run(model.get(7)) == [{"id": 1, "name": "b"}]
        assert asyncio.run(model.get(None)) == [{"id": 1, "name": "b"}]

    def test_unexpected_seqnum_is_stale(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(["s", "s", "s"], [["1", "a", "b"]], seqnum_after=7))
        model, _ = make_model(remote, settings, metrics)

        with pytest.raises(DeeModelError) as exc_info:
            asyncio.run(model.get(8))

        assert exc_info.value.error_code == ErrorCode.STALE_SNAPSHOT
        metrics.record_stale.assert_called_once_with({"service_name": SERVICE})
        metrics.record_rows.assert_not_called()

    def test_transport_failure_propagates(self, settings, metrics):
        remote = FakeRemoteObject(error=TimeoutError("no reply"))
        model, _ = make_model(remote, settings, metrics)

        with pytest.raises(DeeModelError) as exc_info:
            asyncio.run(model.get(7))

        assert exc_info.value.is_transport_error
        assert exc_info.value.message == "Clone call failed: no reply"
        metrics.record_stale.assert_not_called()

    def test_configured_timeout_applies(self, metrics):
        settings = DeeModelSettings(clone_timeout_seconds=0.01)
        remote = FakeRemoteObject(clone_reply([], []), delay=5)
        model, _ = make_model(remote, settings, metrics)

        with pytest.raises(DeeModelError) as exc_info:
            asyncio.run(model.get())

        assert exc_info.value.error_code == ErrorCode.TIMEOUT_ERROR

    def test_overlong_integer_cell_decodes(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(["s"], [["1" * 5000]]))
        model, _ = make_model(remote, settings, metrics, {0: "count"})

        assert asyncio.run(model.get()) == [{"count": float("inf")}]

    def test_calls_are_independent(self, settings, metrics):
        remote = FakeRemoteObject(
            clone_reply(["s", "s", "s"], [["1", "a", "b"]], seqnum_after=3),
            clone_reply(["s", "s", "s"], [["1", "a", "b"], ["2", "c", "d"]], seqnum_after=4),
        )
        model, _ = make_model(remote, settings, metrics)

        async def run():
            return await asyncio.gather(model.get_snapshot(), model.get_snapshot())

        first, second = asyncio.run(run())

        assert len(remote.calls) == 2
        assert (first.seqnum, len(first.records)) == (3, 1)
        assert (second.seqnum, len(second.records)) == (4, 2)

    def test_get_snapshot_carries_metadata(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(
            ["s", "i", "s"], [["1", 5, "Carol"]], seqnum_after=10, swarm_name="swarm-1",
        ))
        model, _ = make_model(remote, settings, metrics)

        snapshot = asyncio.run(model.get_snapshot(10))

        assert snapshot.swarm_name == "swarm-1"
        assert snapshot.seqnum == 10
        assert snapshot.seqnum_before == 9
        assert snapshot.column_types == ["s", "i", "s"]
        assert snapshot.records == [{"id": 1, "name": "Carol"}]
        assert snapshot.to_dict()["records"] == [{"id": 1, "name": "Carol"}]

    def test_every_get_refetches(self, settings, metrics):
        remote = FakeRemoteObject(clone_reply(["s", "s", "s"], []))
        model, _ = make_model(remote, settings, metrics)

        asyncio.run(model.get())
        asyncio.run(model.get())

        assert len(remote.calls) == 2
