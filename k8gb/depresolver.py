"""Operator configuration and resolution of Gslb specifications."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from k8gb.api import Gslb, GslbSpec, Strategy
from k8gb.validator import GEO_TAG_REGEX, ValidationError
from k8gb.validator import field as check_field

GEO_STRATEGY = "geoip"
ROUND_ROBIN_STRATEGY = "roundRobin"
FAILOVER_STRATEGY = "failover"

PREDEFINED_DNS_TTL_SECONDS = 30
PREDEFINED_SPLIT_BRAIN_THRESHOLD_SECONDS = 300


class LogFormat(Enum):
    """How the logger prints values."""

    JSON = 1
    SIMPLE = 2
    NO_FORMAT = 4

    def __str__(self) -> str:
        if self is LogFormat.JSON:
            return "json"
        if self is LogFormat.SIMPLE:
            return "simple"
        return "noformat"


class EdgeDNSType(str, Enum):
    """The edge DNS that k8gb connects to."""

    NO_EDGE_DNS = "NoEdgeDNS"
    INFOBLOX = "Infoblox"
    EXTERNAL = "ExtDNS"
    MULTIPLE_PROVIDERS = "MultipleProviders"

    def __str__(self) -> str:
        return self.value


@dataclass
class LogConfig:
    """Logger settings."""

    level: str = "info"
    format: LogFormat = LogFormat.SIMPLE
    no_color: bool = False


@dataclass
class InfobloxConfig:
    """Connection settings for an Infoblox grid."""

    host: str = ""
    version: str = ""
    port: int = 0
    username: str = ""
    password: str = ""
    http_request_timeout: int = 20
    http_pool_connections: int = 10


@dataclass
class Config:
    """Operator configuration."""

    reconcile_requeue_seconds: int = 30
    cluster_geo_tag: str = ""
    ext_clusters_geo_tags: list[str] = field(default_factory=list)
    edge_dns_type: EdgeDNSType = EdgeDNSType.NO_EDGE_DNS
    edge_dns_servers: list[str] = field(default_factory=list)
    fallback_edge_dns_server_name: str = ""
    fallback_edge_dns_server_port: int = 53
    edge_dns_zone: str = ""
    dns_zone: str = ""
    k8gb_namespace: str = ""
    infoblox: InfobloxConfig = field(default_factory=InfobloxConfig)
    core_dns_exposed: bool = False
    log: LogConfig = field(default_factory=LogConfig)
    metrics_address: str = "0.0.0.0:8080"
    ext_dns_enabled: bool = False
    split_brain_check: bool = False


class GslbResolver(ABC):
    """Resolves Gslb specifications."""

    @abstractmethod
    def resolve_gslb_spec(self, gslb: Gslb, client: Any) -> None:
        """Fill missing spec values with defaults, validate and store the Gslb."""


class DependencyResolver(GslbResolver):
    """Default resolver; remembers the last spec it resolved and its outcome."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self._spec = GslbSpec()
        self._error_spec: Exception | None = None

    def resolve_gslb_spec(self, gslb: Gslb, client: Any) -> None:
        """Apply defaults, validate and update the Gslb through ``client``.

        Work is only done when the spec differs from the last one seen;
        otherwise the previous outcome is repeated.
        """
        if client is None:
            raise ValueError("nil client")
        if gslb.spec != self._spec:
            strategy = gslb.spec.strategy
            if strategy.dns_ttl_seconds == 0:
                strategy.dns_ttl_seconds = PREDEFINED_DNS_TTL_SECONDS
            if strategy.split_brain_threshold_seconds == 0:
                strategy.split_brain_threshold_seconds = (
                    PREDEFINED_SPLIT_BRAIN_THRESHOLD_SECONDS
                )
            try:
                self.validate_spec(strategy)
                client.update(gslb)
            except Exception as exc:  # the outcome is remembered for this spec
                self._error_spec = exc
            else:
                self._error_spec = None
            self._spec = copy.deepcopy(gslb.spec)
        if self._error_spec is not None:
            raise self._error_spec

    def validate_spec(self, strategy: Strategy) -> None:
        """Raise ValidationError when the strategy is not valid."""
        check_field("DNSTtlSeconds", strategy.dns_ttl_seconds).is_higher_or_equal_to_zero().check()
        check_field(
            "SplitBrainThresholdSeconds", strategy.split_brain_threshold_seconds
        ).is_higher_or_equal_to_zero().check()
        check_field("Type", strategy.type).is_one_of(
            ROUND_ROBIN_STRATEGY, GEO_STRATEGY, FAILOVER_STRATEGY
        ).check()
        if strategy.weight.is_empty():
            return
        if strategy.type != ROUND_ROBIN_STRATEGY:
            raise ValidationError("weight is allowed only for roundRobin strategy")
        summary = 0
        for geo_tag, weight in strategy.weight.items():
            check_field("weight", geo_tag).is_not_empty().match_regexp(GEO_TAG_REGEX).check()
            try:
                value = weight.try_parse()
            except ValueError:
                raise ValidationError(f"weight invalid value {weight}") from None
            check_field("weight", value).is_higher_or_equal_to_zero().is_less_or_equal_to(100).check()
            summary += value
        if summary != 100:
            raise ValidationError("weight the sum of the weights must be equal to 100")