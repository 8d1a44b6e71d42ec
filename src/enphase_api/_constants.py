"""Internal constants for the Entrez cloud service and the Envoy gateway."""

from __future__ import annotations

VERSION = "0.1.0"

DEFAULT_ENTREZ_URL = "https://entrez.enphaseenergy.com"

ENTREZ_USERNAME_ENV = "ENTREZ_USERNAME"
ENTREZ_PASSWORD_ENV = "ENTREZ_PASSWORD"

USER_AGENT = f"enphase-api/{VERSION}"

REQUEST_TIMEOUT = 30  # seconds, total per request

AUTH_FLOW = "entrezSession"

# The token page renders the JWT inside <textarea id="JWTToken" ...>...</textarea>
TOKEN_MARKER = 'id="JWTToken"'
TOKEN_END = "</textarea>"

VALID_TOKEN_TEXT = "Valid token"

# Envoy firmware rejects the power PUT unless it is labelled as a form post,
# even though the body is JSON.
POWER_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
POWER_ACCEPT = "application/json, text/javascript, */*; q=0.01"
