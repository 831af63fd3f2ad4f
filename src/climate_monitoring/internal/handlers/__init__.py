"""Implementation of adaptors for driving actors.

Driving actors
--------------

A driving actor is an external component that initiates interaction
with the core logic. Also referred to as *primary* actors, a driving
actor represents an entrypoint that uses the core driving ports
(see `climate_monitoring.internal.ports.services`) in its implementation.
In this manner, it *handles* whatever input it receives and *drives*
the core logic to perform the necessary operations, hence the module
name.

Driving actors own the login state of whoever is using them. They
hold it in an `entities.Session` and pass the logged in operator's
id into the services explicitly.

This module
-----------

This module contains implementations for the following driving actors:

- Command-line interface (CLI) - `climate_monitoring.internal.handlers.cli`
"""

from .cli import CLIHandler

__all__ = [
    "CLIHandler",
]
