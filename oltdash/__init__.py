"""Terminal dashboard for OLTs behind a stateless SNMP query API."""

__version__ = "0.1.0"
