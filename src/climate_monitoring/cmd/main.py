"""Entrypoints to the climate-monitoring service."""

import logging
import os
import sys
from typing import NamedTuple

from climate_monitoring.internal import handlers, ports, repositories

log = logging.getLogger("climate-monitoring")


class Adaptors(NamedTuple):
    """Adaptors for the CLI."""

    record_store: type[ports.RecordStore]


def parse_env() -> Adaptors:
    """Parse from the environment."""
    record_store_adaptor: type[ports.RecordStore]
    match os.getenv("RECORD_STORE"):
        case None | "sql":
            record_store_adaptor = repositories.record_repositories.SQLRecordStore
        case _ as rs:
            log.error(f"Unknown record store '{rs}'. Expected one of ['sql']")
            sys.exit(1)

    return Adaptors(record_store=record_store_adaptor)


def run_cli() -> None:
    """Entrypoint for the CLI handler."""
    adaptors = parse_env()
    c = handlers.CLIHandler(store_adaptor=adaptors.record_store)
    returncode: int = c.run()
    sys.exit(returncode)
