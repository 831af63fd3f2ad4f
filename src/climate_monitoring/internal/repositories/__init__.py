"""Implementation of adaptors for driven actors.

Driven actors
--------------

A driven actor is an external component that is acted upon by the core logic.
Also referred to as *secondary* actors, a driven actor represents an external
system that the core logic interacts with. They extend the core driven ports
(see `climate_monitoring.internal.ports`) in their implementation.

Examples of driven or secondary actors include:

- a database
- a message queue
- a filesystem

Since they are stores of data, they are referred to in this package
(and often in hexagonal architecture documentation) as *repositories*.

This module
-----------

This module contains implementations for the following driven actors:

- Record Store - Where cities, operators, centers and weather observations live

These inherit from the repository ports specified in the core via
`climate_monitoring.internal.ports`.
"""
from . import record_repositories

__all__ = [
    "record_repositories",
]
