"""Building the DNS endpoint of a Gslb and managing its finalizer."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from k8gb.api import Gslb, HealthStatus, ObjectMeta
from k8gb.depresolver import (
    FAILOVER_STRATEGY,
    GEO_STRATEGY,
    ROUND_ROBIN_STRATEGY,
    Config,
)

log = logging.getLogger(__name__)

GSLB_FINALIZER = "k8gb.absa.oss/finalizer"
DNS_TYPE_KEY = "k8gb.absa.oss/dnstype"


def sort_targets(targets: list[str]) -> list[str]:
    """Sort the targets in place and return them."""
    targets.sort()
    return targets


def contains(items: Iterable[str], s: str) -> bool:
    return s in items


def remove(items: Iterable[str], s: str) -> list[str]:
    """Return the items without any occurrence of ``s``."""
    return [item for item in items if item != s]


@dataclass
class Endpoint:
    """A single DNS record set."""

    dns_name: str
    targets: list[str] = field(default_factory=list)
    record_type: str = "A"
    record_ttl: int = 0
    labels: dict[str, str] = field(default_factory=dict)


@dataclass
class DNSEndpoint:
    """A set of DNS records owned by a Gslb."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    endpoints: list[Endpoint] = field(default_factory=list)
    owner_references: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class GslbReconciler:
    """Turns Gslb health and targets into DNS records.

    ``dns_provider`` offers ``gslb_ingress_exposed_ips(gslb)``,
    ``get_external_targets(host)`` and ``finalize(gslb)``; ``service_health``
    maps a Gslb to the health of each of its hosts; ``client`` offers
    ``update(gslb)``; ``metrics``, when given, receives runtime status.
    """

    config: Config
    dns_provider: Any
    service_health: Callable[[Gslb], Mapping[str, HealthStatus]]
    client: Any = None
    metrics: Any = None
    finalizer: str = GSLB_FINALIZER

    def gslb_dns_endpoint(self, gslb: Gslb) -> DNSEndpoint:
        """Build the DNS records for every host of the Gslb."""
        strategy = gslb.spec.strategy
        ttl = strategy.dns_ttl_seconds
        service_health = self.service_health(gslb)
        local_targets = list(self.dns_provider.gslb_ingress_exposed_ips(gslb))
        zone = self.config.edge_dns_zone
        gslb_hosts: list[Endpoint] = []

        for host, health in service_health.items():
            if zone not in host:
                raise ValueError(f"ingress host {host} does not match delegated zone {zone}")

            is_primary = strategy.primary_geo_tag == self.config.cluster_geo_tag
            is_healthy = health == HealthStatus.HEALTHY
            final_targets: list[str] = []

            if is_healthy:
                final_targets.extend(local_targets)
                gslb_hosts.append(
                    Endpoint(
                        dns_name=f"localtargets-{host}",
                        targets=list(local_targets),
                        record_type="A",
                        record_ttl=ttl,
                    )
                )

            external_targets = sort_targets(list(self.dns_provider.get_external_targets(host)))

            if external_targets:
                if strategy.type in (ROUND_ROBIN_STRATEGY, GEO_STRATEGY):
                    final_targets.extend(external_targets)
                elif strategy.type == FAILOVER_STRATEGY:
                    if not is_primary:
                        final_targets = list(external_targets)
                        log.info(
                            "Executing failover strategy for secondary cluster "
                            "gslb=%s cluster=%s targets=%s workload=%s",
                            gslb.name, strategy.primary_geo_tag, final_targets,
                            HealthStatus.HEALTHY,
                        )
                    elif not is_healthy:
                        final_targets = list(external_targets)
                        log.info(
                            "Executing failover strategy for primary cluster "
                            "gslb=%s cluster=%s targets=%s workload=%s",
                            gslb.name, strategy.primary_geo_tag, final_targets,
                            HealthStatus.UNHEALTHY,
                        )
            else:
                log.info("No external targets have been found for host %s", host)

            self.update_runtime_status(gslb, is_primary, health, final_targets)
            log.info("Final target list gslb=%s targets=%s", gslb.name, final_targets)

            if final_targets:
                gslb_hosts.append(
                    Endpoint(
                        dns_name=host,
                        targets=final_targets,
                        record_type="A",
                        record_ttl=ttl,
                        labels={"strategy": strategy.type},
                    )
                )

        return DNSEndpoint(
            metadata=ObjectMeta(
                name=gslb.name,
                namespace=gslb.namespace,
                annotations={DNS_TYPE_KEY: "local"},
                labels={DNS_TYPE_KEY: "local"},
            ),
            endpoints=gslb_hosts,
            owner_references=[
                {
                    "apiVersion": gslb.api_version,
                    "kind": gslb.kind,
                    "name": gslb.name,
                    "controller": True,
                    "blockOwnerDeletion": True,
                }
            ],
        )

    def update_runtime_status(
        self,
        gslb: Gslb,
        is_primary: bool,
        health: HealthStatus,
        final_targets: list[str],
    ) -> None:
        """Report the outcome for the Gslb's strategy to the metrics sink."""
        if self.metrics is None:
            return
        strategy_type = gslb.spec.strategy.type
        if strategy_type == ROUND_ROBIN_STRATEGY:
            self.metrics.update_roundrobin_status(gslb, health, final_targets)
        elif strategy_type == GEO_STRATEGY:
            self.metrics.update_geoip_status(gslb, health, final_targets)
        elif strategy_type == FAILOVER_STRATEGY:
            self.metrics.update_failover_status(gslb, is_primary, health, final_targets)

    def finalize_gslb(self, gslb: Gslb) -> None:
        """Release what the DNS provider holds for the Gslb."""
        try:
            self.dns_provider.finalize(gslb)
        except Exception:
            log.exception("Can't finalize GSLB gslb=%s", gslb.name)
            raise
        log.info("Successfully finalized Gslb gslb=%s", gslb.name)

    def add_finalizer(self, gslb: Gslb) -> None:
        """Append the finalizer to the Gslb and store it."""
        log.info("Adding Finalizer for the Gslb gslb=%s", gslb.name)
        gslb.metadata.finalizers = [*gslb.metadata.finalizers, self.finalizer]
        try:
            self.client.update(gslb)
        except Exception:
            log.exception("Failed to update Gslb with finalizer gslb=%s", gslb.name)
            raise