from ninox_client.core.client import NinoxClient
from ninox_client.core.config import Settings, settings
from ninox_client.core.errors import (
    AuthenticationError,
    ConfigurationError,
    NinoxError,
    NotFoundError,
    SessionNotReadyError,
    TransportError,
)

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "NinoxClient",
    "NinoxError",
    "NotFoundError",
    "SessionNotReadyError",
    "Settings",
    "TransportError",
    "settings",
]
