"""Build one collector hit from an event JSON file and print it."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from gawire.client.collector import GaCollector  # noqa: E402
from gawire.core.errors import GaWireError  # noqa: E402
from gawire.core.events import event_from_dict  # noqa: E402
from gawire.core.settings import settings_from_env  # noqa: E402
from gawire.defaults.config import SETTING_DEBUG_MODE, SETTING_MEASUREMENT_ID  # noqa: E402
from gawire.infra.logger import get_logger  # noqa: E402

ENTRY_POINTS = ("page", "track", "identify", "user")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the GA4 collector request for an event.")
    parser.add_argument("entry_point", choices=ENTRY_POINTS, help="Entry point to invoke")
    parser.add_argument("event", nargs="?", default="-", help="Event JSON file, '-' for stdin")
    parser.add_argument("--measurement-id", help="Overrides GAWIRE_GA_MEASUREMENT_ID")
    parser.add_argument("--debug-hit", action="store_true", help="Flag the hit for DebugView")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    return parser


def main() -> int:
    args = _build_parser().parse_args()
    logger = get_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = settings_from_env()
    if args.measurement_id:
        settings[SETTING_MEASUREMENT_ID] = args.measurement_id
    if args.debug_hit:
        settings[SETTING_DEBUG_MODE] = "true"

    raw = sys.stdin.read() if args.event == "-" else Path(args.event).read_text(encoding="utf-8")
    try:
        event = event_from_dict(json.loads(raw))
        collector = GaCollector(settings)
        request = getattr(collector, args.entry_point)(event)
    except json.JSONDecodeError as exc:
        logger.error("invalid event json: %s", exc, extra={"entry_point": args.entry_point})
        return 2
    except GaWireError as exc:
        logger.error("%s", exc, extra={"entry_point": args.entry_point})
        return 1

    print(f"{request.method} {request.url}")
    for name, value in request.headers:
        print(f"{name}: {value}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
