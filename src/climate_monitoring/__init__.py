"""Climate Monitoring.

Usage Documentation
===================

Operators register, log in, open or join a monitoring center, and record
per-category observations for the cities their center covers. Anyone can
search the monitored cities and view a summary of what has been observed.

All of this is available through the 'climate-monitoring-cli' command::

    $ climate-monitoring-cli register --name-surname "Mario Rossi" \\
        --tax-code RSSMRA80A01H501T --email mario.rossi@example.com --username mrossi
    $ climate-monitoring-cli create-center --username mrossi --name Insubria \\
        --street "Via Ravasi" --street-number 2 --postal-code 21100 \\
        --town Varese --district VA --city-id 1 --city-id 2
    $ climate-monitoring-cli add-data --username mrossi --city-id 1 \\
        --date 01/01/2024 --wind 4 --wind-comment gusty
    $ climate-monitoring-cli show --city-id 1

Configuration
-------------

The following environment variables can be used to configure the application:

.. code-block:: none

    | Key              | Description                           | Default                          |
    |------------------|---------------------------------------|----------------------------------|
    | LOGLEVEL         | The logging level for the app.        | INFO                             |
    |------------------|---------------------------------------|----------------------------------|
    | RECORD_STORE     | The record store to use.              | sql                              |
    |------------------|---------------------------------------|----------------------------------|
    | DATABASE_URL     | SQLAlchemy URL of the record store.   | sqlite:///climate_monitoring.db  |
    |------------------|---------------------------------------|----------------------------------|
    | DATABASE_ECHO    | Whether to log every SQL statement.   | False                            |
    |------------------|---------------------------------------|----------------------------------|


Development Documentation
=========================

Getting started for development
-------------------------------

Create a virtual environment and install the dependencies
using an editable pip installation::

    $ python -m venv ./venv
    $ source ./venv/bin/activate
    $ pip install -e .[dev]

.. note:: ZSH users may have to escape the square brackets in the last command.

This enables the use of the 'climate-monitoring-cli' command in the virtualenv, which
runs the `climate_monitoring.cmd.main.run_cli` entrypoint.

Project structure
-----------------

The code is structured following principles from the `Hexagonal Architecture`_ pattern.
In brief, this means a clear separation between
the application's business logic - it's *core* - and the *actors* that are external to it.

The core of the services is split into three main components:

- `climate_monitoring.internal.entities` - The domain classes that define the structure of
  the data that the services work with, and the business logic they contain.
- `climate_monitoring.internal.ports` - The interfaces that define how the services
  interact with external actors.
- `climate_monitoring.internal.services` - The business logic that defines how the
  service functions.

Alongside these core components are the actors, which adhere to the interfaces defined in the
ports module. Driven actors are sources and sinks of data, such as databases,
while driving actors are methods of interacting with the core, such as a command-line interface.

This application currently has the following defined actors:

- `climate_monitoring.internal.repositories.record_repositories` (driven) - Where the
  cities, operators, centers and observations are stored.
- `climate_monitoring.internal.handlers.cli` (driving) - The command-line interface.

The actors are then responsible for implementing the abstract ports,
and are *dependency-injected* in at runtime. This allows the services to be easily tested
and extended.

Where do I go to...?
--------------------

- **...modify the business logic?** Check out the `internal.services` module.
- **...store records somewhere else?** Implement a new store in
  `internal.repositories.record_repositories`.
- **...modify the command line interface?** Check out `internal.handlers.cli`.

.. _Hexagonal Architecture: https://alistair.cockburn.us/hexagonal-architecture/
"""

import logging
import os
import sys

if sys.stdout.isatty():
    # Simple logging for terminals
    _formatstr = "%(levelname)s [%(name)s] | %(message)s"
else:
    # JSON logging for containers
    _formatstr = "".join((
        "{",
        '"message": "%(message)s", ',
        '"severity": "%(levelname)s", "timestamp": "%(asctime)s.%(msecs)03dZ", ',
        '"logging.googleapis.com/labels": {"python_logger": "%(name)s"}, ',
        '"logging.googleapis.com/sourceLocation": ',
        '{"file": "%(filename)s", "line": %(lineno)d, "function": "%(funcName)s"}',
        "}",
    ))

_loglevel: int | str = logging.getLevelName(os.getenv("LOGLEVEL", "INFO").upper())
logging.basicConfig(
    level=logging.INFO if isinstance(_loglevel, str) else _loglevel,
    stream=sys.stderr,
    format=_formatstr,
    datefmt="%Y-%m-%dT%H:%M:%S",
)

for logger in [
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.orm",
    "asyncio",
]:
    logging.getLogger(logger).setLevel(logging.WARNING)
