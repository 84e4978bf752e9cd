"""HTTP transport shared by every Cachet resource service."""
from __future__ import annotations

import json
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

import requests

from .core import API_PREFIX, Response
from .errors import APIError, AuthenticationError, DecodeError, NotFoundError, TransportError
from .models import Record
from .services.component_groups import ComponentGroupsService
from .services.metric_groups import MetricGroupsService
from .services.metrics import MetricsService

if TYPE_CHECKING:
    from .settings import CachetSettings

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0
DEFAULT_USER_AGENT = "cachet-client-python"
TOKEN_HEADER = "X-Cachet-Token"


class Client:
    """Talks JSON to a Cachet installation.

    ``base_url`` is the root of the status page (``https://status.example.com``);
    resource paths such as ``api/v1/metrics`` are joined onto it. Authentication
    uses the API token header when ``token`` is given, HTTP basic auth when
    ``username`` and ``password`` are given.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        verify: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        if not base_url:
            raise ValueError("base_url is required")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.verify = verify
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": user_agent,
            }
        )
        if token:
            self.set_token_auth(token)
        if username is not None and password is not None:
            self.set_basic_auth(username, password)

        self.component_groups = ComponentGroupsService(self)
        self.metric_groups = MetricGroupsService(self)
        self.metrics = MetricsService(self)

    @classmethod
    def from_settings(cls, settings: "CachetSettings", *, session: Optional[requests.Session] = None) -> "Client":
        return cls(
            settings.base_url,
            token=settings.token,
            username=settings.username,
            password=settings.password,
            session=session,
            timeout=settings.timeout_s,
            verify=settings.verify_tls,
        )

    def set_token_auth(self, token: str) -> None:
        self.session.headers[TOKEN_HEADER] = token

    def set_basic_auth(self, username: str, password: str) -> None:
        self.session.auth = (username, password)

    def url_for(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        decode: Optional[Callable[[Any], Any]] = None,
    ) -> Tuple[Any, Response]:
        """Send one request and return ``(decoded_body, response)``.

        ``decode`` receives the parsed JSON and builds the caller's result;
        without it the body is ignored and ``None`` is returned in its place.
        """
        url = self.url_for(path)
        data = None
        if body is not None:
            payload = body.to_payload() if isinstance(body, Record) else body
            data = json.dumps(payload)

        logger.debug("%s %s", method, url)
        try:
            http_response = self.session.request(
                method,
                url,
                data=data,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as exc:
            raise TransportError(method, url, str(exc)) from exc

        resp = Response(http_response)
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        if not resp.ok:
            raise self._api_error(resp)

        if decode is None:
            return None, resp
        return self._decode(resp, decode), resp

    @staticmethod
    def _decode(resp: Response, decode: Callable[[Any], Any]) -> Any:
        text = resp.http_response.text
        if not text or not text.strip():
            raise DecodeError(resp.url, "empty response body", resp)
        try:
            payload = resp.http_response.json()
        except ValueError as exc:
            raise DecodeError(resp.url, f"invalid JSON ({exc})", resp) from exc
        try:
            return decode(payload)
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise DecodeError(resp.url, str(exc), resp) from exc

    def _api_error(self, resp: Response) -> APIError:
        status = resp.status_code
        detail = self._error_detail(resp)
        logger.warning("Cachet request %s failed with status %s%s", resp.url, status, detail)
        if status == 404:
            return NotFoundError(status, detail, resp)
        if status in (401, 403):
            return AuthenticationError(status, detail, resp)
        return APIError(status, detail, resp)

    @staticmethod
    def _error_detail(resp: Response) -> str:
        detail: Optional[str] = None
        try:
            payload = resp.http_response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            errors = payload.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                first = errors[0]
                detail = first.get("detail") or first.get("title")
            if not detail:
                detail = payload.get("message") or payload.get("error")
        if not detail:
            text = (resp.http_response.text or "").strip()
            if text:
                detail = re.sub(r"\s+", " ", text)[:200]
        return f": {detail}" if detail else ""

    def __repr__(self) -> str:
        return f"<Client {self.base_url}{API_PREFIX}>"


__all__ = ["Client", "DEFAULT_TIMEOUT_S", "TOKEN_HEADER"]
