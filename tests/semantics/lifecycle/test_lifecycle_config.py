"""
Semantic test: lifecycle configuration.

Invariant:
The config validates its fields strictly and builds the clock and the event
bus sinks it describes.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from order_lifecycle.core.domain.types import OrderItem
from order_lifecycle.core.events.sinks.file_recorder import FileRecorderSink
from order_lifecycle.core.events.sinks.null_event_bus import NullEventBus
from order_lifecycle.core.events.sinks.prometheus_metrics import PrometheusMetricsSink
from order_lifecycle.core.events.sinks.sink_logging import LoggingEventSink
from order_lifecycle.core.lifecycle.lifecycle_config import LifecycleConfig
from order_lifecycle.core.ports.clock import FixedClock, SystemClock


def test_defaults() -> None:
    cfg = LifecycleConfig()

    assert isinstance(cfg.build_clock(), SystemClock)
    sinks = cfg.build_event_bus().sinks
    assert len(sinks) == 1
    assert isinstance(sinks[0], LoggingEventSink)


def test_full_config_builds_all_sinks(tmp_path: Path) -> None:
    cfg = LifecycleConfig.from_json_obj(
        {
            "log_events": False,
            "event_log_path": str(tmp_path / "events.jsonl"),
            "metrics": {"namespace": "shop"},
            "fixed_clock": "2024-01-01T00:00:00Z",
        }
    )

    clock = cfg.build_clock()
    assert isinstance(clock, FixedClock)
    assert clock.now() == datetime(2024, 1, 1, tzinfo=timezone.utc)

    bus = cfg.build_event_bus()
    assert [type(sink) for sink in bus.sinks] == [FileRecorderSink, PrometheusMetricsSink]
    bus.close()


def test_from_json_file(tmp_path: Path) -> None:
    path = tmp_path / "lifecycle.json"
    path.write_text(json.dumps({"log_level": "DEBUG"}), encoding="utf-8")

    assert LifecycleConfig.from_json_file(path).log_level == "DEBUG"


def test_from_json_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        LifecycleConfig.from_json_file(tmp_path / "missing.json")


@pytest.mark.parametrize(
    "data",
    [
        {"unexpected": 1},
        {"log_level": "TRACE"},
        {"event_log_path": ""},
        {"metrics": {"namespace": "not-valid"}},
        {"fixed_clock": "2024-01-01T00:00:00"},
    ],
)
def test_invalid_config_rejected(data) -> None:
    with pytest.raises(ValidationError):
        LifecycleConfig.from_json_obj(data)


def test_build_lifecycle_uses_order_id() -> None:
    lifecycle = LifecycleConfig(log_events=False).build_lifecycle(order_id="order-9")

    assert lifecycle.order_id == "order-9"
    lifecycle.close()


def test_no_sinks_configured_builds_null_bus() -> None:
    bus = LifecycleConfig(log_events=False).build_event_bus()

    assert isinstance(bus, NullEventBus)
    assert bus.sinks == ()
    with pytest.raises(RuntimeError):
        bus.register(LoggingEventSink(logging.getLogger("test.null_bus")))


def test_lifecycle_runs_on_null_bus() -> None:
    lifecycle = LifecycleConfig(log_events=False, fixed_clock="2024-01-01T00:00:00Z").build_lifecycle()

    order = lifecycle.add_item(lifecycle.create(), OrderItem(id="a", price=4)).order
    result = lifecycle.pay(order)

    assert result.ok
    assert result.order.amount_paid == 4
    lifecycle.close()
