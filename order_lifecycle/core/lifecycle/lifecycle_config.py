"""Lifecycle configuration model.

Builds the clock and the event bus (with its sinks) used by OrderLifecycle.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from order_lifecycle.core.events.event_bus import EventBus
from order_lifecycle.core.events.event_sink import EventSink
from order_lifecycle.core.events.sinks.file_recorder import FileRecorderSink
from order_lifecycle.core.events.sinks.null_event_bus import NullEventBus
from order_lifecycle.core.events.sinks.prometheus_metrics import PrometheusMetricsSink
from order_lifecycle.core.events.sinks.sink_logging import LoggingEventSink
from order_lifecycle.core.lifecycle.order_lifecycle import OrderLifecycle
from order_lifecycle.core.ports.clock import Clock, FixedClock, SystemClock

EVENTS_LOGGER_NAME = "order_lifecycle.events"


class MetricsConfig(BaseModel):
    namespace: str = Field("order_lifecycle", pattern=r"^[a-zA-Z_][a-zA-Z0-9_]*$")
    push_job: str = Field("order_lifecycle", min_length=1)

    model_config = ConfigDict(extra="forbid")


class LifecycleConfig(BaseModel):
    """Structured lifecycle configuration.

    JSON example:
        {
          "log_events": true,
          "log_level": "INFO",
          "event_log_path": "out/order_events.jsonl",
          "metrics": {"namespace": "shop"},
          "fixed_clock": "2024-01-01T00:00:00Z"
        }
    """

    log_events: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    event_log_path: str | None = Field(default=None, min_length=1)
    metrics: MetricsConfig | None = None

    # When set, completion instants and event timestamps are fixed.
    fixed_clock: AwareDatetime | None = None

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def from_json_obj(cls, config_obj: dict[str, Any]) -> LifecycleConfig:
        """Create a LifecycleConfig instance from a JSON-compatible object."""
        return cls.model_validate(config_obj)

    @classmethod
    def from_json_file(cls, path: str | Path) -> LifecycleConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))

    def build_clock(self) -> Clock:
        if self.fixed_clock is not None:
            return FixedClock(self.fixed_clock)
        return SystemClock()

    def build_event_bus(self) -> EventBus:
        """Return a bus with the configured sinks, or a NullEventBus when none are enabled."""
        sinks: list[EventSink] = []

        if self.log_events:
            sinks.append(LoggingEventSink(logging.getLogger(EVENTS_LOGGER_NAME)))
        if self.event_log_path is not None:
            sinks.append(FileRecorderSink(self.event_log_path))
        if self.metrics is not None:
            sinks.append(
                PrometheusMetricsSink(
                    namespace=self.metrics.namespace,
                    push_job=self.metrics.push_job,
                )
            )

        if not sinks:
            return NullEventBus()
        return EventBus(sinks)

    def build_lifecycle(self, order_id: str | None = None) -> OrderLifecycle:
        return OrderLifecycle(
            clock=self.build_clock(),
            event_bus=self.build_event_bus(),
            order_id=order_id,
        )
