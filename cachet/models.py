"""Records mirroring the Cachet resources and their wire format.

Field names match the JSON keys used by the API. Most fields are left out of
request bodies when they hold their zero value; the ones declared with
``always=True`` are sent unconditionally because Cachet reads a missing key
differently from an explicit zero.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

RecordT = TypeVar("RecordT", bound="Record")
Number = Union[int, float]


class GroupVisibility(IntEnum):
    """Visibility of component and metric groups."""

    LOGGED_IN = 0
    PUBLIC = 1


class CollapsedState(IntEnum):
    EXPANDED = 0
    COLLAPSED_IF_OPERATIONAL = 1
    ALWAYS_COLLAPSED = 2


class MetricVisibility(IntEnum):
    LOGGED_IN = 0
    PUBLIC = 1
    HIDDEN = 2


class CalculationType(IntEnum):
    SUM = 0
    AVERAGE = 1


class MetricView(IntEnum):
    """Default time range shown for a metric chart."""

    LAST_HOUR = 0
    LAST_12_HOURS = 1
    LAST_WEEK = 2
    LAST_MONTH = 3


def wire(
    default: Any = None,
    *,
    always: bool = False,
    enum: Optional[Type[IntEnum]] = None,
    nested: Optional[Type["Record"]] = None,
    numeric: bool = False,
) -> Any:
    """Declare a record field together with its serialization rule."""
    metadata = {"always": always, "enum": enum, "nested": nested, "numeric": numeric}
    if nested is not None:
        return field(default_factory=list, metadata=metadata)
    return field(default=default, metadata=metadata)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (bool, int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def _to_wire(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_payload()
    if isinstance(value, (list, tuple)):
        return [_to_wire(item) for item in value]
    if isinstance(value, bool):
        return value
    if isinstance(value, Enum):
        return value.value
    return value


def _coerce_enum(enum_cls: Type[IntEnum], value: Any) -> Any:
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError, OverflowError):
        # unknown discriminant: keep the raw value
        return value


def _coerce_number(value: Any) -> Number:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number


class Record:
    """Mixin giving dataclass records the Cachet JSON representation."""

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        for item in fields(self):  # type: ignore[arg-type]
            value = getattr(self, item.name)
            if not item.metadata.get("always") and _is_empty(value):
                continue
            payload[item.name] = _to_wire(value)
        return payload

    @classmethod
    def from_dict(cls: Type[RecordT], data: Mapping[str, Any]) -> RecordT:
        if not isinstance(data, Mapping):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        for item in fields(cls):  # type: ignore[arg-type]
            value = data.get(item.name)
            if value is None:
                continue
            enum_cls = item.metadata.get("enum")
            nested = item.metadata.get("nested")
            if nested is not None:
                if not isinstance(value, list):
                    raise TypeError(f"'{item.name}' must be a list")
                value = [nested.from_dict(entry) for entry in value]
            elif enum_cls is not None:
                value = _coerce_enum(enum_cls, value)
            elif item.metadata.get("numeric"):
                value = _coerce_number(value)
            kwargs[item.name] = value
        return cls(**kwargs)


@dataclass
class Component(Record):
    """Read-only component as embedded in component group views."""

    id: int = wire(0)
    name: str = wire("")
    description: str = wire("")
    link: str = wire("")
    status: int = wire(0)
    status_name: str = wire("")
    order: int = wire(0)
    group_id: int = wire(0)
    enabled: bool = wire(False)
    created_at: str = wire("")
    updated_at: str = wire("")
    deleted_at: str = wire("")


@dataclass
class ComponentGroup(Record):
    id: int = wire(0)
    name: str = wire("")
    order: int = wire(0)
    collapsed: CollapsedState = wire(CollapsedState.EXPANDED, always=True, enum=CollapsedState)
    visible: GroupVisibility = wire(GroupVisibility.LOGGED_IN, enum=GroupVisibility)
    created_at: str = wire("")
    updated_at: str = wire("")
    enabled_components: List[Component] = wire(nested=Component)
    enabled_components_lowest: List[Component] = wire(nested=Component)
    lowest_human_status: str = wire("")


@dataclass
class MetricGroup(Record):
    id: int = wire(0)
    name: str = wire("")
    order: int = wire(0)
    visible: GroupVisibility = wire(GroupVisibility.LOGGED_IN, enum=GroupVisibility)
    created_at: str = wire("")
    updated_at: str = wire("")


@dataclass
class Metric(Record):
    id: int = wire(0)
    name: str = wire("")
    suffix: str = wire("")
    description: str = wire("")
    default_value: int = wire(0, always=True)
    calc_type: CalculationType = wire(CalculationType.SUM, always=True, enum=CalculationType)
    display_chart: bool = wire(False, always=True)
    places: int = wire(0)
    default_view: MetricView = wire(MetricView.LAST_HOUR, always=True, enum=MetricView)
    threshold: int = wire(0)
    order: int = wire(0)
    visible: MetricVisibility = wire(MetricVisibility.LOGGED_IN, always=True, enum=MetricVisibility)
    created_at: str = wire("")
    updated_at: str = wire("")
    default_view_name: str = wire("")
    group_id: int = wire(0)


@dataclass
class Point(Record):
    """A single data point of a metric."""

    id: int = wire(0)
    metric_id: int = wire(0)
    value: Number = wire(0, numeric=True)
    created_at: str = wire("")
    updated_at: str = wire("")
    counter: int = wire(0)
    calculated_value: Number = wire(0, numeric=True)


__all__ = [
    "CalculationType",
    "CollapsedState",
    "Component",
    "ComponentGroup",
    "GroupVisibility",
    "Metric",
    "MetricGroup",
    "MetricView",
    "MetricVisibility",
    "Point",
    "Record",
]
