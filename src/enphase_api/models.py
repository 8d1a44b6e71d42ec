"""Wire-level data models shared by the Entrez and Envoy clients."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum

from enphase_api.errors import JsonError


class PowerState(Enum):
    """Logical power state of a microinverter."""

    ON = "on"
    OFF = "off"

    @property
    def payload_value(self) -> int:
        """Value sent in the ``arr`` field of the power PUT.

        The device field is a "forced off" level, so ``ON`` maps to ``0``
        and ``OFF`` to ``1``.
        """
        return 0 if self is PowerState.ON else 1

    @classmethod
    def from_powered_on(cls, powered_on: bool) -> PowerState:
        """Map the boolean returned by :meth:`Envoy.get_power_state`."""
        return cls.ON if powered_on else cls.OFF


@dataclass(frozen=True)
class PowerStatusResponse:
    """Body of ``GET /ivp/mod/{serial}/mode/power``."""

    power_forced_off: bool
    """``powerForcedOff`` on the wire; ``True`` means the inverter is off."""

    @property
    def powered_on(self) -> bool:
        return not self.power_forced_off

    @classmethod
    def from_json(cls, text: str) -> PowerStatusResponse:
        """Decode a device response body.

        Unknown keys are ignored.  Raises :class:`JsonError` if the body
        is not a JSON object with a boolean ``powerForcedOff``.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise JsonError(str(e)) from e
        if not isinstance(data, dict):
            raise JsonError(f"expected a JSON object, got {type(data).__name__}")
        if "powerForcedOff" not in data:
            raise JsonError("missing field `powerForcedOff`")
        value = data["powerForcedOff"]
        if not isinstance(value, bool):
            raise JsonError(f"invalid type for `powerForcedOff`: {value!r}, expected a boolean")
        return cls(power_forced_off=value)


def normalize_site_name(site_name: str) -> str:
    """Lowercase *site_name* and replace spaces with ``+``.

    This is the keyword form the token page expects in its ``Site`` field,
    not percent-encoding.
    """
    return site_name.lower().replace(" ", "+")


def uncommissioned_value(commissioned: bool) -> str:
    """Value of the ``uncommissioned`` form field for the token exchange."""
    return "off" if commissioned else "on"


def power_payload(state: PowerState) -> str:
    """Build the body of the power PUT, e.g. ``{"length":1,"arr":[0]}``."""
    return json.dumps({"length": 1, "arr": [state.payload_value]}, separators=(",", ":"))
