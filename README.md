# k8gb

A library that models global server load balancing (GSLB) resources,
validates their load-balancing strategy and computes the DNS A records a
cluster should publish for them.

## Modules

### `k8gb.api`

The Gslb resource model:

- `Gslb` with `metadata` (`ObjectMeta`: name, namespace, labels,
  annotations, finalizers), `spec` (`GslbSpec`) and `status` (`GslbStatus`).
  `Gslb.api_version` is `"k8gb.absa.oss/v1beta1"` and `Gslb.kind` is `"Gslb"`.
- `GslbSpec` holds an `IngressSpec` and a `Strategy`.
- `Strategy` has `type`, `weight`, `primary_geo_tag`, `dns_ttl_seconds` and
  `split_brain_threshold_seconds`.
- `Weight` is a dict of geo tag to `Percentage`; values are converted to
  `Percentage` on assignment.
- `Percentage` is a string such as `"35%"`. Spaces and one trailing `%` are
  ignored. `try_parse()` returns the integer or raises `ValueError`;
  `to_int()` returns `0` when the text is not a number.
- `HealthStatus`: `HEALTHY`, `UNHEALTHY`, `NOT_FOUND`.
- `IngressSpec`, `IngressRule`, `IngressRuleValue`, with
  `IngressSpec.deep_copy()`.
- `from_v1_ingress_spec(mapping)` and `to_v1_ingress_spec(spec)` convert
  between `IngressSpec` and a networking/v1 ingress spec given as a plain
  mapping with camel-case keys (`ingressClassName`, `defaultBackend`, `tls`,
  `rules`).

### `k8gb.validator`

Chainable checks on a named value. `field(name, value)` accepts an int, a
string or a list of strings and returns a `Validator`; any other type is
recorded as an error. Each check (`is_not_empty`, `match_regexp`,
`match_regexps`, `is_higher_than_zero`, `is_higher_or_equal_to_zero`,
`is_less_or_equal_to`, `is_higher_than`, `has_items`, `has_unique_items`,
`is_one_of`) keeps the first failure in `err`, and `check()` raises it as a
`ValidationError`. `is_not_blank(s)` tells whether a string holds anything
but spaces. Regular expressions for geo tags, host names, IPv4 addresses,
version numbers and namespaces are provided as module constants.

### `k8gb.depresolver`

- Configuration dataclasses `Config`, `LogConfig` and `InfobloxConfig`, and
  the enums `LogFormat` and `EdgeDNSType`. Their defaults are fixed in code
  (for example a 30 second requeue, edge DNS port 53, metrics on
  `0.0.0.0:8080`).
- Strategy names `ROUND_ROBIN_STRATEGY` (`"roundRobin"`), `GEO_STRATEGY`
  (`"geoip"`) and `FAILOVER_STRATEGY` (`"failover"`).
- `GslbResolver`, an abstract interface with `resolve_gslb_spec(gslb, client)`.
- `DependencyResolver`:
  - `validate_spec(strategy)` raises `ValidationError` unless the TTL and
    split-brain threshold are not negative, the type is one of the three
    strategies, and any weights belong to a `roundRobin` strategy, have
    geo-tag keys, lie between 0 and 100 and add up to exactly 100.
  - `resolve_gslb_spec(gslb, client)` raises `ValueError` when `client` is
    `None`. When the spec differs from the last one it saw, it sets a TTL of
    30 s and a split-brain threshold of 300 s where they are zero, validates
    the strategy and calls `client.update(gslb)`. The outcome is remembered:
    an unchanged spec raises the same error again, or nothing.

### `k8gb.dnsupdate`

`GslbReconciler(config, dns_provider, service_health, client=None, metrics=None)`:

- `dns_provider` must offer `gslb_ingress_exposed_ips(gslb)`,
  `get_external_targets(host)` and `finalize(gslb)`.
- `service_health(gslb)` returns a mapping of host to `HealthStatus`.
- `client` must offer `update(gslb)`.
- `metrics`, if given, receives `update_roundrobin_status`,
  `update_geoip_status` or `update_failover_status` calls.

`gslb_dns_endpoint(gslb)` returns a `DNSEndpoint` of `Endpoint` A records.
For every host (which must contain the configured edge DNS zone, otherwise
`ValueError` is raised):

- a healthy host gets a `localtargets-<host>` record of the local targets;
- external targets are sorted; `roundRobin` and `geoip` publish local
  targets (when healthy) plus external ones; `failover` publishes the
  external targets on a secondary cluster, and on the primary cluster only
  when it is unhealthy;
- the host record is labelled with the strategy type and left out when it
  has no targets.

The `DNSEndpoint` carries the Gslb's name and namespace, the
`k8gb.absa.oss/dnstype: local` label and annotation, and an owner reference
to the Gslb.

`finalize_gslb(gslb)` calls the provider's `finalize`; `add_finalizer(gslb)`
appends `k8gb.absa.oss/finalizer` to the Gslb's finalizers and stores it
through the client. Errors from either are logged and raised again.
`sort_targets`, `contains` and `remove` are small list helpers.

## Example

```python
from k8gb.api import Strategy, Weight
from k8gb.depresolver import DependencyResolver

strategy = Strategy(type="roundRobin", weight=Weight({"eu": "60%", "us": "40%"}))
DependencyResolver().validate_spec(strategy)  # raises ValidationError on invalid input
```

## What it does not do

The package is a library of models and computations. It does not run a
controller loop, talk to a Kubernetes API server, read its configuration
from environment variables, ship DNS provider implementations (Infoblox or
otherwise), or export metrics. Those are supplied by the caller through the
`client`, `dns_provider`, `service_health` and `metrics` objects.

## Installation

```
pip install .
```

The tests use pytest, available through the `test` extra.