"""mucajey catalog sync: credential provisioning, catalog client, local cache and sync."""

__version__ = "0.1.0"
