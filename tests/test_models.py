"""Built-in report body types and their wire formats."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from reporting_api import NEL, CSPViolation, Crash, Deprecation, Intervention, create_registry
from reporting_api.errors import BodySchemaMismatchError

NEL_BODY = {
    "referrer": "https://example.com/",
    "sampling_fraction": 0.5,
    "server_ip": "203.0.113.75",
    "protocol": "h2",
    "method": "POST",
    "status_code": 200,
    "elapsed_time": 45,
    "phase": "application",
    "type": "ok",
}


@pytest.fixture
def registry():
    return create_registry()


class TestNEL:
    def test_decode(self, registry):
        nel = registry.lookup("network-error").decode("network-error", NEL_BODY)
        assert isinstance(nel, NEL)
        assert nel.status == "ok"
        assert nel.status_code == 200
        assert nel.elapsed == timedelta(milliseconds=45)

    def test_optional_fields(self, registry):
        body = {k: v for k, v in NEL_BODY.items() if k not in ("status_code", "elapsed_time")}
        body["type"] = "dns.name_not_resolved"
        body["phase"] = "dns"
        nel = registry.lookup("network-error").decode("network-error", body)
        assert nel.status_code is None
        assert nel.elapsed is None
        assert registry.lookup("network-error").encode(nel) == body

    def test_encode_uses_wire_names(self, registry):
        nel = NEL.model_validate(NEL_BODY)
        assert registry.lookup("network-error").encode(nel) == NEL_BODY

    @pytest.mark.parametrize("fraction", [-0.1, 1.5])
    def test_sampling_fraction_range(self, registry, fraction):
        with pytest.raises(BodySchemaMismatchError) as exc_info:
            registry.lookup("network-error").decode("network-error", {**NEL_BODY, "sampling_fraction": fraction})
        assert exc_info.value.tag == "network-error"
        assert exc_info.value.details["errors"][0]["loc"] == ("sampling_fraction",)

    def test_missing_required_field(self, registry):
        body = dict(NEL_BODY)
        del body["type"]
        with pytest.raises(BodySchemaMismatchError):
            registry.lookup("network-error").decode("network-error", body)


class TestCSPViolation:
    def test_camel_case_wire_names(self, registry):
        body = {
            "documentURL": "https://example.com/",
            "effectiveDirective": "img-src",
            "originalPolicy": "img-src 'none'",
            "disposition": "report",
            "statusCode": 0,
            "sourceFile": "https://example.com/app.js",
            "columnNumber": 3,
        }
        csp = registry.lookup("csp-violation").decode("csp-violation", body)
        assert csp.document_url == "https://example.com/"
        assert csp.blocked_url is None
        assert csp.column_number == 3
        assert registry.lookup("csp-violation").encode(csp) == body

    def test_disposition_values(self, registry):
        with pytest.raises(BodySchemaMismatchError):
            registry.lookup("csp-violation").decode(
                "csp-violation",
                {
                    "documentURL": "https://example.com/",
                    "effectiveDirective": "img-src",
                    "originalPolicy": "img-src 'none'",
                    "disposition": "block",
                    "statusCode": 200,
                },
            )


class TestReportingTypes:
    def test_crash_has_no_required_fields(self, registry):
        crash = registry.lookup("crash").decode("crash", {})
        assert crash == Crash()
        assert registry.lookup("crash").encode(Crash(reason="oom")) == {"reason": "oom"}

    def test_deprecation(self, registry):
        body = {
            "id": "websql",
            "anticipatedRemoval": "2020-01-01",
            "message": "WebSQL is deprecated and will be removed in Chrome 97.",
            "sourceFile": "https://example.com/index.js",
            "lineNumber": 1234,
            "columnNumber": 42,
        }
        dep = registry.lookup("deprecation").decode("deprecation", body)
        assert isinstance(dep, Deprecation)
        assert dep.anticipated_removal == "2020-01-01"
        assert registry.lookup("deprecation").encode(dep) == body

    def test_intervention(self, registry):
        body = {"id": "audio-no-gesture", "message": "A request to play audio was blocked"}
        intervention = registry.lookup("intervention").decode("intervention", body)
        assert isinstance(intervention, Intervention)
        assert intervention.line_number is None


@pytest.mark.parametrize(
    "value",
    [
        NEL.model_validate(NEL_BODY),
        CSPViolation(
            document_url="https://example.com/",
            effective_directive="script-src",
            original_policy="script-src 'self'",
            disposition="enforce",
            status_code=200,
            sample="alert(1)",
        ),
        Crash(reason="unresponsive", stack="at main()"),
        Deprecation(id="x", message="gone soon"),
        Intervention(id="y", message="blocked", line_number=3),
    ],
    ids=lambda v: type(v).__name__,
)
def test_round_trip(registry, value):
    handle = registry.wrap(value)
    strategy = registry.lookup(handle.tag)
    decoded = strategy.decode(handle.tag, handle.encode())
    assert decoded == value
    assert registry.wrap(decoded).equals(handle)


def test_models_are_immutable():
    crash = Crash(reason="oom")
    with pytest.raises(ValidationError):
        crash.reason = "unresponsive"
