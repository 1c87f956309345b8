import asyncio
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import requests

from igsocial.shared.settings import InstagramSettings
from igsocial.specs.common.errors import TransportError


_LOGGER = logging.getLogger("igsocial.graph")

GraphParams = Mapping[str, Any]


def _encode_value(value: Any) -> Any:
    # Graph expects lowercase booleans in query strings and form bodies
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def encode_params(params: Optional[GraphParams]) -> Dict[str, Any]:
    """Drop unset values and encode the rest the way the Graph API expects."""
    return {k: _encode_value(v) for k, v in (params or {}).items() if v is not None}


def _error_message(response: requests.Response) -> Tuple[str, Optional[Dict[str, Any]]]:
    try:
        payload = response.json()
    except ValueError:
        return f"Graph API returned HTTP {response.status_code}: {response.text[:200]}", None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"]), payload
    return f"Graph API returned HTTP {response.status_code}", payload if isinstance(payload, dict) else None


class GraphClient:
    """Authenticated access to the Graph API.

    Calls run on `asyncio.to_thread` workers and requests.Session is not
    documented as thread-safe, so each worker thread gets its own session
    from `session_factory`. An explicitly passed `session` is shared by
    every thread.
    """

    def __init__(
        self,
        settings: InstagramSettings,
        session: Optional[requests.Session] = None,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.settings = settings
        self.base_url = f"{settings.graph_base_url.rstrip('/')}/{settings.api_version}"
        self._session = session
        self._session_factory = session_factory
        self._local = threading.local()
        self._lock = threading.Lock()
        self._opened: List[requests.Session] = []

    def _get_session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._opened.append(session)
        return session

    def url_for(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[GraphParams] = None,
        access_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Perform one Graph call and return its JSON body.

        GET and DELETE send params in the query string, POST form-encodes them.
        The token goes in the Authorization header, never in the URL or body;
        `access_token` overrides the configured token for this call only.
        Raises TransportError on network failure or a non-2xx response.
        """
        method = method.upper()
        payload = encode_params(params)
        token = access_token or self.settings.access_token
        url = self.url_for(endpoint)
        kwargs: Dict[str, Any] = {
            "headers": {"Authorization": f"Bearer {token}"},
            "timeout": self.settings.request_timeout_seconds,
        }
        if method == "POST":
            kwargs["data"] = payload
        else:
            kwargs["params"] = payload

        _LOGGER.debug("graph:%s %s", method, endpoint)
        try:
            response = self._get_session().request(method, url, **kwargs)
        except requests.RequestException as exc:
            # str(exc) quotes the request URL; report the exception type only
            raise TransportError(
                f"Graph API request failed: {type(exc).__name__} on {method} {endpoint}",
                details={"endpoint": endpoint, "method": method},
            ) from exc

        if not response.ok:
            message, body = _error_message(response)
            _LOGGER.warning("graph:%s %s failed status=%s", method, endpoint, response.status_code)
            raise TransportError(
                message,
                status_code=response.status_code,
                payload=body,
                details={"endpoint": endpoint, "method": method},
            )

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                "Graph API returned a non-JSON body",
                status_code=response.status_code,
                details={"endpoint": endpoint},
            ) from exc
        # DELETE and some POSTs answer with a bare boolean
        return data if isinstance(data, dict) else {"success": data}

    def close(self) -> None:
        """Close the injected session and every per-thread session opened so far."""
        with self._lock:
            opened, self._opened = self._opened, []
        for session in opened:
            session.close()
        if self._session is not None:
            self._session.close()
        self._local = threading.local()


async def call_graph(
    client: GraphClient,
    method: str,
    endpoint: str,
    params: Optional[GraphParams] = None,
    access_token: Optional[str] = None,
) -> Dict[str, Any]:
    """Run one blocking Graph call off the event loop."""
    return await asyncio.to_thread(client.request, method, endpoint, params, access_token)
