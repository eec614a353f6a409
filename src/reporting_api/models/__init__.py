"""
Report envelope and the built-in report body types.

Each body module exposes register_into(registry); register_builtin_types()
calls all of them.
"""

from typing import TYPE_CHECKING

from reporting_api.models import csp, nel, reporting
from reporting_api.models.csp import CSPViolation
from reporting_api.models.envelope import Envelope, RawEnvelope
from reporting_api.models.nel import NEL
from reporting_api.models.reporting import Crash, Deprecation, Intervention

if TYPE_CHECKING:
    from reporting_api.registry import SchemaRegistry

BUILTIN_MODULES = (nel, csp, reporting)


def register_builtin_types(registry: "SchemaRegistry") -> None:
    for module in BUILTIN_MODULES:
        module.register_into(registry)


__all__ = [
    "CSPViolation",
    "Crash",
    "Deprecation",
    "Envelope",
    "Intervention",
    "NEL",
    "RawEnvelope",
    "register_builtin_types",
]
