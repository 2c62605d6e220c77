"""Closed set of failures a plan request can end in."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class PlanErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    INPUT_TOO_LONG = "input_too_long"
    SERVICE_INVOCATION = "service_invocation"
    EMPTY_OUTPUT = "empty_output"
    MALFORMED_OUTPUT = "malformed_output"


ERROR_MESSAGES: Dict[PlanErrorKind, str] = {
    PlanErrorKind.CONFIGURATION: "Missing OPENAI_API_KEY",
    PlanErrorKind.INPUT_TOO_LONG: "Input too long",
    PlanErrorKind.SERVICE_INVOCATION: "Failed to generate plan",
    PlanErrorKind.EMPTY_OUTPUT: "No model output",
    PlanErrorKind.MALFORMED_OUTPUT: "Model returned invalid JSON",
}

ERROR_STATUS_CODES: Dict[PlanErrorKind, int] = {
    PlanErrorKind.CONFIGURATION: 500,
    PlanErrorKind.INPUT_TOO_LONG: 400,
    PlanErrorKind.SERVICE_INVOCATION: 500,
    PlanErrorKind.EMPTY_OUTPUT: 500,
    PlanErrorKind.MALFORMED_OUTPUT: 500,
}


@dataclass(frozen=True)
class PlanFailure:
    kind: PlanErrorKind
    details: Optional[str] = None

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self.kind]

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload
