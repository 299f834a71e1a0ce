"""Client module for shipping logs to SLS."""

from .sls_client import SlsClient, create_client, create_client_from_env

__all__ = ["SlsClient", "create_client", "create_client_from_env"]
