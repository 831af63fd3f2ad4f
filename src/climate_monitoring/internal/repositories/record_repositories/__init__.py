"""Record store adaptors.

Each adaptor implements `climate_monitoring.internal.ports.RecordStore`,
serving every kind of record from a single backing store.
"""

from .sql import SQLRecordStore

__all__ = [
    "SQLRecordStore",
]
