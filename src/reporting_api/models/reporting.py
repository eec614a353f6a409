"""
Report types defined by the Reporting API itself (crash, deprecation and intervention).
"""

from typing import TYPE_CHECKING, ClassVar, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from reporting_api.registry import SchemaRegistry


class _ReportBody(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Crash(_ReportBody):
    """Body of a "crash" report."""
    report_type: ClassVar[str] = "crash"

    reason: Optional[str] = None        # "oom" | "unresponsive"
    stack: Optional[str] = None


class Deprecation(_ReportBody):
    """Body of a "deprecation" report."""
    report_type: ClassVar[str] = "deprecation"

    id: str
    anticipated_removal: Optional[str] = None
    message: str
    source_file: Optional[str] = None
    line_number: Optional[int] = None
    column_number: Optional[int] = None


class Intervention(_ReportBody):
    """Body of an "intervention" report."""
    report_type: ClassVar[str] = "intervention"

    id: str
    message: str
    source_file: Optional[str] = None
    line_number: Optional[int] = None
    column_number: Optional[int] = None


def register_into(registry: "SchemaRegistry") -> None:
    registry.register_model(Crash)
    registry.register_model(Deprecation)
    registry.register_model(Intervention)
