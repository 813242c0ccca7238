from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Endpoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str
    port: str

    @field_validator("port", mode="before")
    @classmethod
    def _port_as_text(cls, value: Any) -> Any:
        # Numeric ports travel as decimal text, like a service name would.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"
