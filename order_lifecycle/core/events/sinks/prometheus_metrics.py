from __future__ import annotations

import json
import logging
import os
from typing import Any

from prometheus_client import CollectorRegistry, Counter, push_to_gateway

from order_lifecycle.core.events.events import OrderRejectedEvent, OrderTransitionEvent

LOGGER = logging.getLogger(__name__)


class PrometheusMetricsSink:
    """Counts order transitions and rejections in a private CollectorRegistry.

    Exposed counters (``<ns>`` is the configured namespace):
    - <ns>_order_transitions_total{operation, prev_state, next_state}
    - <ns>_order_rejections_total{operation, state, error_type}

    Optional environment:
    - PROMETHEUS_PUSHGATEWAY_URL: when set, close() pushes the registry to the
      Pushgateway under ``push_job``.
    - PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON: JSON object used as grouping key.

    Pushing is best-effort: a failed push is logged and never propagated.
    """

    def __init__(
        self,
        *,
        namespace: str = "order_lifecycle",
        push_job: str = "order_lifecycle",
        registry: CollectorRegistry | None = None,
    ) -> None:
        self._registry = registry if registry is not None else CollectorRegistry()
        self._push_job = push_job
        self._pushgateway_url = os.environ.get("PROMETHEUS_PUSHGATEWAY_URL")
        self._grouping_key = self._load_grouping_key()
        self._closed = False

        self._transitions = Counter(
            "order_transitions",
            "Successful order transitions.",
            labelnames=["operation", "prev_state", "next_state"],
            namespace=namespace,
            registry=self._registry,
        )
        self._rejections = Counter(
            "order_rejections",
            "Rejected order transitions.",
            labelnames=["operation", "state", "error_type"],
            namespace=namespace,
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    @staticmethod
    def _load_grouping_key() -> dict[str, str]:
        raw = os.environ.get("PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON")
        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning(
                "Invalid PROMETHEUS_PUSHGATEWAY_GROUPING_KEY_JSON; ignoring"
            )
            return {}

        if not isinstance(data, dict):
            return {}

        return {
            key: value
            for key, value in data.items()
            if isinstance(key, str) and isinstance(value, str)
        }

    def on_event(self, event: Any) -> None:
        if isinstance(event, OrderTransitionEvent):
            self._transitions.labels(
                operation=event.operation,
                prev_state=event.prev_state,
                next_state=event.next_state,
            ).inc()
        elif isinstance(event, OrderRejectedEvent):
            self._rejections.labels(
                operation=event.operation,
                state=event.state,
                error_type=event.error_type,
            ).inc()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        if not self._pushgateway_url:
            return

        try:
            push_to_gateway(
                gateway=self._pushgateway_url,
                job=self._push_job,
                registry=self._registry,
                grouping_key=self._grouping_key,
            )
        except Exception:
            LOGGER.exception("Prometheus push failed")
            return

        LOGGER.info(
            "Prometheus metrics pushed",
            extra={"job": self._push_job, "grouping_key": self._grouping_key},
        )
