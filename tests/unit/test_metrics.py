"""Unit tests for Clone traffic metrics."""

from unittest.mock import Mock, patch

from deemodel.monitoring import ModelMetrics, get_metrics


class TestModelMetrics:

    @patch("deemodel.monitoring.metrics.get_meter")
    def test_records_clone_outcomes(self, mock_get_meter):
        meter = Mock()
        mock_get_meter.return_value = meter
        metrics = ModelMetrics()

        metrics.record_clone(0.25, True, {"service_name": "com.example.Model"})

        metrics.snapshot_counter.add.assert_called_with(
            1, {"service_name": "com.example.Model", "status": "success"}
        )
        metrics.clone_duration_histogram.record.assert_called_with(
            0.25, {"service_name": "com.example.Model", "status": "success"}
        )

    @patch("deemodel.monitoring.metrics.get_meter")
    def test_zero_row_counts_are_not_recorded(self, mock_get_meter):
        meter = Mock()
        meter.create_counter.side_effect = lambda **kwargs: Mock(name=kwargs["name"])
        mock_get_meter.return_value = meter
        metrics = ModelMetrics()

        metrics.record_rows(3, 0, {})

        metrics.rows_decoded_counter.add.assert_called_once_with(3, {})
        metrics.rows_dropped_counter.add.assert_not_called()

    def test_shared_collector(self):
        assert get_metrics() is get_metrics()
