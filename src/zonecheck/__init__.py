"""zonecheck - verify that live nameservers serve the records you declared."""

__version__ = "0.1.0"
