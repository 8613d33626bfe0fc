"""
Configuration
-------------
The client supports two credential modes:

1. When get_client(interactive = True)
    User is prompted for the values below at runtime if any are missing from the environment.
2. When get_client(interactive = False) - Default
        BUGZILLA_URL      https://bugzilla.example.org
        BUGZILLA_API_KEY  <optional, from Preferences > API Keys>
        BUGZILLA_TIMEOUT  <optional, seconds, defaults to 30>

Dependencies:
    uv add requests

"""
from __future__ import annotations

import itertools
import logging
import os
from collections.abc import Mapping
from getpass import getpass
from typing import Any

import requests

from bugzilla_client_interface.errors import BugzillaRPCError, TransportError
from bugzilla_client_interface.method import BugzillaMethod
from bugzilla_client_interface.transport import Transport

__all__ = ["BugzillaClient", "JsonRpcTransport", "get_client"]

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# ---------------------------------------------------------------------------
# Transport implementation
# ---------------------------------------------------------------------------

class JsonRpcTransport(Transport):
    """
    Calls Bugzilla's JSON-RPC endpoint (<base_url>/jsonrpc.cgi).

    Args:
        base_url: Bugzilla root URL (e.g. 'https://bugzilla.example.org')
        api_key:  Optional API key, sent with every call as Bugzilla_api_key
        timeout:  Seconds to wait for the server on each call
    """

    _ENDPOINT = "/jsonrpc.cgi"

    def __init__(self, base_url: str, api_key: str | None = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._ids = itertools.count(1)
        self._session = requests.Session()
        self._session.headers.update({"Accept": "application/json", "Content-Type": "application/json"})

    @property
    def url(self) -> str:
        return f"{self._base_url}{self._ENDPOINT}"

    def execute(self, method_name: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
        params = dict(parameters)
        if self._api_key:
            params["Bugzilla_api_key"] = self._api_key
        payload = {"method": method_name, "params": [params], "id": next(self._ids)}

        try:
            response = self._session.post(self.url, json=payload, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", self.url, exc)
            raise TransportError(f"Could not reach Bugzilla at {self.url}: {exc}") from exc
        self._raise_for_status(response)

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportError(f"Bugzilla returned a non-JSON response for {method_name}") from exc
        if not isinstance(body, dict):
            raise TransportError(f"Bugzilla returned an unexpected response for {method_name}")

        error = body.get("error")
        if error:
            if isinstance(error, Mapping):
                raise BugzillaRPCError(error.get("message", "unknown error"), error.get("code"))
            raise BugzillaRPCError(str(error))
        return body.get("result") or {}

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if not response.ok:
            logger.error("Bugzilla HTTP error %s from %s", response.status_code, response.url)
            raise TransportError(f"Bugzilla HTTP error {response.status_code}: {response.text}")


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class BugzillaClient:
    """Executes remote methods over a transport.

    Example:
        get_bug = client.execute_method(GetBug(42))
        bug = get_bug.bug
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def execute_method(self, method: BugzillaMethod) -> BugzillaMethod:
        """Send method, hand the response back to it and return it.

        Raises:
            TransportError: Propagated unchanged from the transport.

        """
        logger.debug("Executing %s", method.method_name)
        method.mark_sent()
        try:
            response = self._transport.execute(method.method_name, dict(method.parameter_map))
        except BugzillaRPCError as exc:
            logger.warning("%s failed: %s", method.method_name, exc)
            raise
        method.set_result_map(response)
        return method


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> BugzillaClient:
    """Return a BugzillaClient talking JSON-RPC to the configured server.

    Reads configuration from environment variables. If "interactive = True"
    and the URL or API key is missing, the user will be prompted.

    Environment variables:
        BUGZILLA_URL:      Base URL of the Bugzilla instance.
        BUGZILLA_API_KEY:  Optional API key.
        BUGZILLA_TIMEOUT:  Optional request timeout in seconds.
    """
    base_url = os.environ.get("BUGZILLA_URL", "")
    api_key = os.environ.get("BUGZILLA_API_KEY", "")
    timeout = float(os.environ.get("BUGZILLA_TIMEOUT", DEFAULT_TIMEOUT))

    if interactive:
        if not base_url:
            base_url = input("Bugzilla URL (e.g. https://bugzilla.example.org): ").strip()
        if not api_key:
            api_key = getpass("Bugzilla API key (leave blank for anonymous access): ")
    elif not base_url:
        raise EnvironmentError(
            "Missing required environment variable: BUGZILLA_URL. "
            "Set it or call get_client(interactive=True)."
        )

    return BugzillaClient(JsonRpcTransport(base_url, api_key or None, timeout))
