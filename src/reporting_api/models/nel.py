"""
Network Error Logging body, report type "network-error".
"""

from datetime import timedelta
from typing import TYPE_CHECKING, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from reporting_api.registry import SchemaRegistry


class NEL(BaseModel):
    """The body of a single Network Error Logging report."""

    report_type: ClassVar[str] = "network-error"

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    referrer: str
    sampling_fraction: float = Field(ge=0.0, le=1.0)
    server_ip: str
    protocol: str                                   # ALPN ID, e.g. "h2"
    method: str
    status_code: Optional[int] = None
    elapsed_time: Optional[int] = Field(default=None, ge=0)  # milliseconds
    phase: str                                      # "dns" | "connection" | "application"
    status: str = Field(alias="type")               # "ok" or a NEL error type

    @property
    def elapsed(self) -> Optional[timedelta]:
        if self.elapsed_time is None:
            return None
        return timedelta(milliseconds=self.elapsed_time)


def register_into(registry: "SchemaRegistry") -> None:
    registry.register_model(NEL)
