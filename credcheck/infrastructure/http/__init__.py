"""HTTP infrastructure module."""

from credcheck.infrastructure.http.client import create_probe_client

__all__ = ["create_probe_client"]
