from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Failure(BaseModel):
    """A single schema violation reported against a JSON Pointer in the instance.

    ``alternatives`` holds one list of sub-messages per branch of a combinator
    such as ``anyOf`` or ``oneOf``, in branch order.
    """

    model_config = ConfigDict(frozen=True)

    pointer: str
    message: str
    alternatives: list[list[str]] = Field(default_factory=list)

    def format_message(self) -> str:
        msg = self.message
        for idx, alternative in enumerate(self.alternatives):
            for sub_message in alternative:
                msg += "\n\t" + sub_message
            if idx < len(self.alternatives) - 1:
                msg += "\nor"
        return msg


class Diagnostic(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: Path
    message: str
    line: int = Field(default=1, ge=1)
    severity: Severity = Severity.ERROR
