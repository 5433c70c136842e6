"""Gslb resource types of the k8gb.absa.oss/v1beta1 API group."""

from __future__ import annotations

import copy
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="k8gb.absa.oss", version="v1beta1")


class HealthStatus(str, Enum):
    """Health of the service behind a Gslb host."""

    HEALTHY = "Healthy"
    UNHEALTHY = "Unhealthy"
    NOT_FOUND = "NotFound"

    def __str__(self) -> str:
        return self.value


def _atoi(text: str) -> tuple[int, str | None]:
    """Parse a decimal integer strictly; return the value and an error, if any."""
    if not _INT_PATTERN.fullmatch(text):
        return 0, f"invalid syntax: {text!r}"
    value = int(text)
    if value > _INT_MAX:
        return _INT_MAX, f"value out of range: {text!r}"
    if value < _INT_MIN:
        return _INT_MIN, f"value out of range: {text!r}"
    return value, None


class Percentage(str):
    """A weight such as ``"35%"``; spaces and one trailing ``%`` are ignored."""

    def is_empty(self) -> bool:
        return str(self) == ""

    def _parse(self) -> tuple[int, str | None]:
        return _atoi(self.replace(" ", "").removesuffix("%"))

    def try_parse(self) -> int:
        """Return the integer value, raising ValueError if it is not one."""
        value, error = self._parse()
        if error is not None:
            raise ValueError(error)
        return value

    def to_int(self) -> int:
        """Return the integer value, or 0 when the text is not a number."""
        value, _ = self._parse()
        return value


class Weight(dict):
    """Mapping of geo tag to :class:`Percentage`."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, key: str, value: str) -> None:
        super().__setitem__(key, Percentage(value))

    def update(self, *args: Any, **kwargs: Any) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def is_empty(self) -> bool:
        return len(self) == 0


@dataclass
class Strategy:
    """Load-balancing behaviour of a Gslb."""

    type: str = ""
    weight: Weight = field(default_factory=Weight)
    primary_geo_tag: str = ""
    dns_ttl_seconds: int = 0
    split_brain_threshold_seconds: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.weight, Weight):
            self.weight = Weight(self.weight or {})


@dataclass
class IngressRuleValue:
    """The HTTP routing part of an ingress rule."""

    http: Any = None


@dataclass
class IngressRule:
    """Maps paths under a host to backend services."""

    host: str = ""
    ingress_rule_value: IngressRuleValue = field(default_factory=IngressRuleValue)

    @property
    def http(self) -> Any:
        return self.ingress_rule_value.http


@dataclass
class IngressSpec:
    """Ingress specification embedded in a Gslb."""

    ingress_class_name: str | None = None
    default_backend: Any = None
    tls: list[Any] = field(default_factory=list)
    rules: list[IngressRule] = field(default_factory=list)

    def deep_copy(self) -> IngressSpec:
        """Return a copy that shares no mutable state with this spec."""
        return copy.deepcopy(self)


@dataclass
class GslbSpec:
    """Desired state of a Gslb."""

    ingress: IngressSpec = field(default_factory=IngressSpec)
    strategy: Strategy = field(default_factory=Strategy)


@dataclass
class GslbStatus:
    """Observed state of a Gslb."""

    service_health: dict[str, HealthStatus] = field(default_factory=dict)
    healthy_records: dict[str, list[str]] = field(default_factory=dict)
    geo_tag: str = ""


@dataclass
class ObjectMeta:
    """Metadata carried by every resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)


@dataclass
class Gslb:
    """A Gslb custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: GslbSpec = field(default_factory=GslbSpec)
    status: GslbStatus = field(default_factory=GslbStatus)

    api_version = str(GROUP_VERSION)
    kind = "Gslb"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace


def from_v1_ingress_spec(v1_spec: Mapping[str, Any]) -> IngressSpec:
    """Build an :class:`IngressSpec` from a networking/v1 ingress spec mapping."""
    rules = [
        IngressRule(
            host=rule.get("host", ""),
            ingress_rule_value=IngressRuleValue(http=rule.get("http")),
        )
        for rule in v1_spec.get("rules") or ()
    ]
    return IngressSpec(
        ingress_class_name=v1_spec.get("ingressClassName"),
        default_backend=v1_spec.get("defaultBackend"),
        tls=list(v1_spec.get("tls") or ()),
        rules=rules,
    )


def _rule_to_v1(rule: IngressRule) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if rule.host:
        result["host"] = rule.host
    if rule.http is not None:
        result["http"] = rule.http
    return result


def to_v1_ingress_spec(spec: IngressSpec) -> dict[str, Any]:
    """Render an :class:`IngressSpec` as a networking/v1 ingress spec mapping."""
    result: dict[str, Any] = {}
    if spec.ingress_class_name is not None:
        result["ingressClassName"] = spec.ingress_class_name
    if spec.default_backend is not None:
        result["defaultBackend"] = spec.default_backend
    if spec.tls:
        result["tls"] = list(spec.tls)
    if spec.rules:
        result["rules"] = [_rule_to_v1(rule) for rule in spec.rules]
    return result