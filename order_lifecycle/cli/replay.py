"""Replay a JSON command script through the order lifecycle.

Script format:
    {
      "order": {"state": "empty"},          # optional starting value
      "commands": [
        {"command": "add_item", "item": {"id": "a", "price": 7}},
        {"command": "pay"},
        {"command": "complete"}
      ]
    }

Exit codes: 0 success, 1 rejected transition, 2 invalid input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from pydantic import TypeAdapter, ValidationError

from order_lifecycle.core.domain.types import Order, OrderCommand
from order_lifecycle.core.lifecycle.lifecycle_config import LifecycleConfig

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INVALID_INPUT = 2

_ORDER_ADAPTER: TypeAdapter[Any] = TypeAdapter(Order)
_COMMANDS_ADAPTER: TypeAdapter[Any] = TypeAdapter(list[OrderCommand])

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return data


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replay order commands and print the resulting order as JSON"
    )

    parser.add_argument(
        "--script",
        type=Path,
        required=True,
        help="Path to the JSON command script.",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a lifecycle JSON config (defaults apply when omitted).",
    )

    parser.add_argument(
        "--order-id",
        default=None,
        help="Label attached to emitted order events.",
    )

    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        cfg = LifecycleConfig.from_json_file(args.config) if args.config else LifecycleConfig()
        script = _load_json(args.script)
        commands = _COMMANDS_ADAPTER.validate_python(script.get("commands", []))
        start = _ORDER_ADAPTER.validate_python(script["order"]) if "order" in script else None
        # Opens the event log, so an unusable event_log_path is invalid input too.
        lifecycle = cfg.build_lifecycle(order_id=args.order_id)
    except (OSError, ValueError, ValidationError) as exc:
        # pydantic's ValidationError and JSONDecodeError are ValueErrors.
        print(f"invalid input: {exc}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    logging.basicConfig(level=cfg.log_level)

    try:
        result = lifecycle.replay(commands, order=start)
    finally:
        lifecycle.close()

    if result.error is not None:
        print(f"{type(result.error).__name__}: {result.error.message}", file=sys.stderr)
        return EXIT_REJECTED

    print(json.dumps(result.order.model_dump(mode="json"), indent=2))
    LOGGER.info("Replayed %d commands", len(commands), extra={"order_id": args.order_id})
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
