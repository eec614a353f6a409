"""
Content Security Policy violation body, report type "csp-violation".
"""

from typing import TYPE_CHECKING, ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from reporting_api.registry import SchemaRegistry


class CSPViolation(BaseModel):
    report_type: ClassVar[str] = "csp-violation"

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    document_url: str = Field(alias="documentURL")
    referrer: Optional[str] = None
    blocked_url: Optional[str] = Field(default=None, alias="blockedURL")
    effective_directive: str
    original_policy: str
    source_file: Optional[str] = None
    sample: Optional[str] = None
    disposition: Literal["enforce", "report"]
    status_code: int
    line_number: Optional[int] = None
    column_number: Optional[int] = None


def register_into(registry: "SchemaRegistry") -> None:
    registry.register_model(CSPViolation)
