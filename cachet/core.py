"""Core abstractions shared by the Cachet resource services."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Generic,
    List,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Type,
    TypeVar,
)
from urllib.parse import urlencode

from .errors import QueryEncodingError

if TYPE_CHECKING:
    from requests import Response as RequestsResponse

    from .client import Client
else:  # pragma: no cover - used only for typing
    RequestsResponse = Any  # type: ignore[assignment]
    Client = Any  # type: ignore[assignment]

API_PREFIX = "api/v1"

T = TypeVar("T")


class Decodable(Protocol):
    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:  # pragma: no cover - protocol
        ...


R = TypeVar("R", bound=Decodable)


class Response:
    """Transport metadata returned next to every decoded payload."""

    __slots__ = ("http_response",)

    def __init__(self, http_response: RequestsResponse) -> None:
        self.http_response = http_response

    @property
    def status_code(self) -> int:
        return int(self.http_response.status_code)

    @property
    def headers(self) -> Mapping[str, str]:
        return self.http_response.headers

    @property
    def url(self) -> str:
        return str(self.http_response.url)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {self.url}>"


@dataclass
class Links:
    next_page: Optional[str] = None
    previous_page: Optional[str] = None


@dataclass
class Pagination:
    """Pagination block found under ``meta.pagination`` on list calls."""

    total: int = 0
    count: int = 0
    per_page: int = 0
    current_page: int = 0
    total_pages: int = 0
    links: Links = field(default_factory=Links)

    @property
    def has_next(self) -> bool:
        return bool(self.links.next_page) or self.current_page < self.total_pages


@dataclass
class Meta:
    pagination: Pagination = field(default_factory=Pagination)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Meta":
        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise TypeError(f"'meta' must be an object, got {type(data).__name__}")
        raw = data.get("pagination") or {}
        if not isinstance(raw, Mapping):
            raise TypeError(f"'meta.pagination' must be an object, got {type(raw).__name__}")
        links = raw.get("links") or {}
        if not isinstance(links, Mapping):
            raise TypeError(f"'pagination.links' must be an object, got {type(links).__name__}")
        pagination = Pagination(
            total=int(raw.get("total", 0) or 0),
            count=int(raw.get("count", 0) or 0),
            per_page=int(raw.get("per_page", 0) or 0),
            current_page=int(raw.get("current_page", 0) or 0),
            total_pages=int(raw.get("total_pages", 0) or 0),
            links=Links(
                next_page=links.get("next_page"),
                previous_page=links.get("previous_page"),
            ),
        )
        return cls(pagination=pagination)


@dataclass
class Envelope(Generic[T]):
    """The ``{meta, data}`` wrapper around every Cachet payload."""

    data: T
    meta: Meta = field(default_factory=Meta)


def _envelope_body(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise TypeError("response body is not a JSON object")
    return payload


def single_decoder(model: Type[R]) -> Callable[[Any], Envelope[R]]:
    """Return a decoder for ``{"data": {...}}`` bodies."""

    def _decode(payload: Any) -> Envelope[R]:
        body = _envelope_body(payload)
        data = body.get("data")
        if not isinstance(data, Mapping):
            raise ValueError("expected an object under 'data'")
        return Envelope(data=model.from_dict(data), meta=Meta.from_dict(body.get("meta")))

    return _decode


def list_decoder(model: Type[R]) -> Callable[[Any], Envelope[List[R]]]:
    """Return a decoder for ``{"meta": {...}, "data": [...]}`` bodies."""

    def _decode(payload: Any) -> Envelope[List[R]]:
        body = _envelope_body(payload)
        data = body.get("data") or []
        if not isinstance(data, list):
            raise ValueError("expected a list under 'data'")
        items = [model.from_dict(item) for item in data]
        return Envelope(data=items, meta=Meta.from_dict(body.get("meta")))

    return _decode


def query_field(name: str, default: Any = 0) -> Any:
    """Declare a filter field serialized under the query key ``name``."""
    return field(default=default, metadata={"query": name})


@dataclass
class QueryOptions:
    """Pagination and sorting options shared by every list call."""

    page: int = query_field("page")
    per_page: int = query_field("per_page")
    sort_field: str = query_field("sort", "")
    sort_order: str = query_field("order", "")


def _is_zero(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return value == 0
    if isinstance(value, str):
        return value == ""
    return False


def _render(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _render(name, value.value)
    if isinstance(value, (int, float, str)):
        return str(value)
    raise QueryEncodingError(f"Cannot encode field '{name}' of type {type(value).__name__}")


def encode_query(options: QueryOptions) -> List[Tuple[str, str]]:
    """Return ``(key, value)`` pairs for every non-zero filter field."""
    if not isinstance(options, QueryOptions) or not is_dataclass(options):
        raise QueryEncodingError(f"Unsupported filter type {type(options).__name__}")
    shared = {item.name for item in fields(QueryOptions)}
    declared = fields(options)
    ordered = [item for item in declared if item.name not in shared]
    ordered.extend(item for item in declared if item.name in shared)

    pairs: List[Tuple[str, str]] = []
    for item in ordered:
        value = getattr(options, item.name)
        if _is_zero(value):
            continue
        key = item.metadata.get("query", item.name)
        pairs.append((key, _render(item.name, value)))
    return pairs


def add_options(path: str, options: Optional[QueryOptions]) -> str:
    """Append the encoded filter to ``path``; ``None`` leaves it untouched."""
    if options is None:
        return path
    pairs = encode_query(options)
    if not pairs:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{urlencode(pairs)}"


class Service:
    """Base class for a resource service bound to one collection path."""

    path: str = ""

    def __init__(self, client: Client) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        return self._client

    def _item_path(self, resource_id: int) -> str:
        return f"{self.path}/{int(resource_id)}"

    def _list(
        self,
        model: Type[R],
        filter: Optional[QueryOptions] = None,
    ) -> Tuple[Envelope[List[R]], Response]:
        url = add_options(self.path, filter)
        return self._client.call("GET", url, decode=list_decoder(model))

    def _one(self, method: str, url: str, model: Type[R], body: Any = None) -> Tuple[R, Response]:
        envelope, resp = self._client.call(method, url, body, decode=single_decoder(model))
        return envelope.data, resp

    def _delete(self, url: str) -> Response:
        _, resp = self._client.call("DELETE", url)
        return resp


__all__ = [
    "API_PREFIX",
    "Envelope",
    "Links",
    "Meta",
    "Pagination",
    "QueryOptions",
    "Response",
    "Service",
    "add_options",
    "encode_query",
    "list_decoder",
    "query_field",
    "single_decoder",
]
