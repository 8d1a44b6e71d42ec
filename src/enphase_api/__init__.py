"""Async Python client for Enphase Entrez token issuance and local Envoy gateways."""

from enphase_api.entrez import Entrez
from enphase_api.envoy import Envoy
from enphase_api.errors import (
    AuthenticationError,
    ConfigurationError,
    EnphaseError,
    EnphaseIOError,
    InvalidResponseError,
    JsonError,
    TransportError,
)
from enphase_api.models import PowerState, PowerStatusResponse

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "EnphaseError",
    "EnphaseIOError",
    "Entrez",
    "Envoy",
    "InvalidResponseError",
    "JsonError",
    "PowerState",
    "PowerStatusResponse",
    "TransportError",
]
