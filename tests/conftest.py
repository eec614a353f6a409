"""Shared fixtures: registries, a codec, and sample report payloads."""

import copy
import json
from typing import ClassVar

import pytest
from pydantic import BaseModel, ConfigDict

from reporting_api import ReportCodec, ReportingSettings, create_registry

NEL_REPORT = {
    "age": 500,
    "type": "network-error",
    "url": "https://example.com/about/",
    "user_agent": "Mozilla/5.0",
    "body": {
        "referrer": "https://example.com/",
        "sampling_fraction": 0.5,
        "server_ip": "203.0.113.75",
        "protocol": "h2",
        "method": "POST",
        "status_code": 200,
        "elapsed_time": 45,
        "phase": "application",
        "type": "ok",
    },
}

CSP_REPORT = {
    "age": 12,
    "type": "csp-violation",
    "url": "https://example.com/login",
    "user_agent": "Mozilla/5.0",
    "destination": "csp-endpoint",
    "body": {
        "documentURL": "https://example.com/login",
        "blockedURL": "https://evil.example/x.js",
        "effectiveDirective": "script-src-elem",
        "originalPolicy": "script-src 'self'; report-to csp-endpoint",
        "disposition": "enforce",
        "statusCode": 200,
        "lineNumber": 7,
    },
}


class Lint(BaseModel):
    """A custom report type registered by application code."""

    report_type: ClassVar[str] = "lint"

    model_config = ConfigDict(frozen=True)

    source_file: str
    line: int
    column: int
    finding: str


class LintV2(BaseModel):
    """Same fields as Lint, registered under a different tag."""

    report_type: ClassVar[str] = "lint-v2"

    model_config = ConfigDict(frozen=True)

    source_file: str
    line: int
    column: int
    finding: str


def make_batch(*reports) -> bytes:
    return json.dumps(list(reports)).encode("utf-8")


@pytest.fixture
def nel_report():
    return copy.deepcopy(NEL_REPORT)


@pytest.fixture
def csp_report():
    return copy.deepcopy(CSP_REPORT)


@pytest.fixture
def registry():
    registry = create_registry()
    registry.register_model(Lint)
    registry.register_model(LintV2)
    return registry


@pytest.fixture
def codec(registry):
    return ReportCodec(registry, ReportingSettings(env="test"))
