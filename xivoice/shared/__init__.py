from __future__ import annotations

from .exceptions import (
    XiCancelledError,
    XiConfigError,
    XiDecodeError,
    XiException,
    XiNetworkError,
    XiRequestError,
)
from .requests import ClientConfig, RequestDescriptor, XiClient, get_client, reset_client

__all__ = [
    "ClientConfig",
    "RequestDescriptor",
    "XiCancelledError",
    "XiClient",
    "XiConfigError",
    "XiDecodeError",
    "XiException",
    "XiNetworkError",
    "XiRequestError",
    "get_client",
    "reset_client",
]
