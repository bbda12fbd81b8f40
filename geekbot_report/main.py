"""Entrypoint for running the report via `python -m geekbot_report.main`."""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from .config import ConfigError, load_settings
from .geekbot_client import GeekbotApiError
from .service import run_report
from .slack_client import SlackApiError

logger = logging.getLogger("geekbot_report")


def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )
    if unknown:
        logger.warning("Unknown LOG_LEVEL %r, using INFO", level_name)


def run() -> int:
    configure_logging()
    try:
        settings = load_settings(os.getenv("GEEKBOT_REPORT_ENV"))
        asyncio.run(run_report(settings))
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except (GeekbotApiError, SlackApiError) as exc:
        logger.error("Report failed: %s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Report failed unexpectedly")
        return 1
    logger.info("Report published")
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
