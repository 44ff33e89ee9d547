"""Token acquisition for carriers whose APIs require a bearer credential."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

import requests

from .models import Carrier, CarrierCredential

LOGGER = logging.getLogger(__name__)

GOL_TOKEN_URL = "https://gol-auth-api.voegol.com.br/api/authentication/create-token"
AZUL_TOKEN_URL = "https://b2c-api.voeazul.com.br/authentication/api/authentication/v1/token"
AZUL_SUBSCRIPTION_HEADER = "Ocp-Apim-Subscription-Key"

CredentialAcquirer = Callable[[], CarrierCredential]


class CredentialError(RuntimeError):
    """Raised when a carrier-wide credential cannot be obtained."""


class CredentialNotConfiguredError(CredentialError):
    """Raised when the secret needed to request a token is missing."""


def _json_body(response: requests.Response, carrier: Carrier) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError as exc:
        raise CredentialError(f"{carrier.display_name} token endpoint returned a non-JSON body") from exc
    if not isinstance(body, dict):
        raise CredentialError(f"{carrier.display_name} token endpoint returned an unexpected payload")
    return body


class GolCredentialProvider:
    """Obtain a GOL token using the account's ``x-aat`` header."""

    carrier = Carrier.GOL

    def __init__(
        self,
        aat_header: Optional[str],
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        url: str = GOL_TOKEN_URL,
    ) -> None:
        self._aat_header = aat_header
        self._session = session or requests.Session()
        self._timeout = timeout
        self._url = url

    def __call__(self) -> CarrierCredential:
        if not self._aat_header:
            raise CredentialNotConfiguredError("AAT_HEADER_GOL is not set")
        try:
            response = self._session.get(self._url, headers={"x-aat": self._aat_header}, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise CredentialError(f"GOL token request failed: {exc}") from exc

        body = _json_body(response, self.carrier)
        token = (body.get("response") or {}).get("token")
        if not token:
            raise CredentialError("GOL token response did not contain a token")
        return CarrierCredential(carrier=self.carrier, token=str(token))


class AzulCredentialProvider:
    """Obtain an AZUL token using the API subscription key."""

    carrier = Carrier.AZUL

    def __init__(
        self,
        subscription_key: Optional[str],
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        url: str = AZUL_TOKEN_URL,
    ) -> None:
        self._subscription_key = subscription_key
        self._session = session or requests.Session()
        self._timeout = timeout
        self._url = url

    def __call__(self) -> CarrierCredential:
        if not self._subscription_key:
            raise CredentialNotConfiguredError("AZUL_KEY is not set")
        headers = {AZUL_SUBSCRIPTION_HEADER: self._subscription_key}
        try:
            response = self._session.post(self._url, json={}, headers=headers, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise CredentialError(f"AZUL token request failed: {exc}") from exc

        token = _json_body(response, self.carrier).get("data")
        if not token or not isinstance(token, str):
            raise CredentialError("AZUL token response did not contain a token")
        # Booking queries must repeat the subscription key next to the bearer token.
        return CarrierCredential(carrier=self.carrier, token=token, extra_headers=headers)


def acquire_credentials(acquirers: Dict[Carrier, CredentialAcquirer]) -> Dict[Carrier, Optional[CarrierCredential]]:
    """Call every acquirer once; a failing carrier maps to ``None``."""

    credentials: Dict[Carrier, Optional[CarrierCredential]] = {}
    for carrier, acquire in acquirers.items():
        try:
            credentials[carrier] = acquire()
            LOGGER.info("Obtained %s credential", carrier.display_name)
        except CredentialNotConfiguredError as exc:
            LOGGER.warning("Skipping %s credential: %s", carrier.display_name, exc)
            credentials[carrier] = None
        except CredentialError as exc:
            LOGGER.error("Could not obtain %s credential: %s", carrier.display_name, exc)
            credentials[carrier] = None
        except Exception:
            LOGGER.exception("Unexpected failure while obtaining %s credential", carrier.display_name)
            credentials[carrier] = None
    return credentials
