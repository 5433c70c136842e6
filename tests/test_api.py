import pytest

from k8gb.api import (
    GROUP_VERSION,
    GroupVersion,
    Gslb,
    GslbSpec,
    GslbStatus,
    HealthStatus,
    IngressRule,
    IngressRuleValue,
    IngressSpec,
    ObjectMeta,
    Percentage,
    Strategy,
    Weight,
    from_v1_ingress_spec,
    to_v1_ingress_spec,
)


def test_group_version_string():
    assert str(GROUP_VERSION) == "k8gb.absa.oss/v1beta1"
    assert str(GroupVersion(group="", version="v1")) == "v1"


def test_health_status_values():
    assert str(HealthStatus.HEALTHY) == "Healthy"
    assert str(HealthStatus.UNHEALTHY) == "Unhealthy"
    assert HealthStatus("NotFound") is HealthStatus.NOT_FOUND


@pytest.mark.parametrize(
    "text, expected",
    [("50%", 50), (" 3 0 % ", 30), ("+7", 7), ("-5%", -5), ("100", 100)],
)
def test_percentage_try_parse(text, expected):
    assert Percentage(text).try_parse() == expected
    assert Percentage(text).to_int() == expected


@pytest.mark.parametrize("text", ["abc", "", "50%%", "5.5", "1_0", "%"])
def test_percentage_invalid(text):
    with pytest.raises(ValueError):
        Percentage(text).try_parse()
    assert Percentage(text).to_int() == 0


def test_percentage_is_empty():
    assert Percentage("").is_empty()
    assert not Percentage("10%").is_empty()


def test_weight_coerces_values_and_reports_emptiness():
    weight = Weight({"eu": "60%"})
    weight["us"] = "40%"
    assert isinstance(weight["us"], Percentage)
    assert sum(p.to_int() for p in weight.values()) == 100
    assert not weight.is_empty()
    assert Weight().is_empty()


def test_strategy_converts_plain_weight_mapping():
    strategy = Strategy(type="roundRobin", weight={"eu": "20%"})
    assert isinstance(strategy.weight, Weight)
    assert strategy.weight["eu"].try_parse() == 20


def test_ingress_rule_http_shortcut():
    http = {"paths": [{"path": "/"}]}
    rule = IngressRule(host="app.cloud.example.com", ingress_rule_value=IngressRuleValue(http=http))
    assert rule.http is http


def test_deep_copy_is_independent():
    spec = IngressSpec(
        ingress_class_name="nginx",
        tls=[{"hosts": ["app.example.com"]}],
        rules=[IngressRule(host="app.example.com", ingress_rule_value=IngressRuleValue(http={"paths": []}))],
    )
    copied = spec.deep_copy()
    assert copied == spec
    copied.rules[0].ingress_rule_value.http["paths"].append({"path": "/x"})
    copied.tls[0]["hosts"].append("other.example.com")
    assert spec.rules[0].http == {"paths": []}
    assert spec.tls[0]["hosts"] == ["app.example.com"]


def test_v1_round_trip():
    v1 = {
        "ingressClassName": "nginx",
        "defaultBackend": {"service": {"name": "frontend"}},
        "tls": [{"hosts": ["app.example.com"]}],
        "rules": [
            {"host": "app.example.com", "http": {"paths": [{"path": "/"}]}},
            {"host": "api.example.com"},
        ],
    }
    spec = from_v1_ingress_spec(v1)
    assert spec.ingress_class_name == "nginx"
    assert [rule.host for rule in spec.rules] == ["app.example.com", "api.example.com"]
    assert spec.rules[1].http is None
    assert to_v1_ingress_spec(spec) == v1


def test_v1_empty_spec():
    spec = from_v1_ingress_spec({})
    assert spec == IngressSpec()
    assert to_v1_ingress_spec(spec) == {}


def test_gslb_accessors_and_equality():
    gslb = Gslb(
        metadata=ObjectMeta(name="test-gslb", namespace="test-ns"),
        spec=GslbSpec(strategy=Strategy(type="failover", primary_geo_tag="eu")),
        status=GslbStatus(service_health={"app.example.com": HealthStatus.HEALTHY}),
    )
    assert gslb.name == "test-gslb"
    assert gslb.namespace == "test-ns"
    assert gslb.kind == "Gslb"
    assert gslb.api_version == "k8gb.absa.oss/v1beta1"
    other = Gslb(
        metadata=ObjectMeta(name="test-gslb", namespace="test-ns"),
        spec=GslbSpec(strategy=Strategy(type="failover", primary_geo_tag="eu")),
        status=GslbStatus(service_health={"app.example.com": HealthStatus.HEALTHY}),
    )
    assert gslb == other
    other.spec.strategy.dns_ttl_seconds = 30
    assert gslb.spec != other.spec