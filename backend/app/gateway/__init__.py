"""Persistence gateways for the remote trip collection."""

from .base import TripGateway
from .exceptions import (
    GatewayConnectionError,
    GatewayError,
    GatewayResponseError,
    GatewayTimeoutError,
)
from .http import HttpTripGateway
from .memory import InMemoryTripGateway

__all__ = [
    "TripGateway",
    "HttpTripGateway",
    "InMemoryTripGateway",
    "GatewayError",
    "GatewayConnectionError",
    "GatewayTimeoutError",
    "GatewayResponseError",
]
