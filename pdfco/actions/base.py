"""
Abstract base class for PDF.co actions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, FrozenSet, Mapping, Optional, Type

from pydantic import ValidationError

from pdfco.core.errors import ActionValidationError
from pdfco.core.materializer import InlineMode
from pdfco.schemas.common import ActionRequest


@dataclass
class PreparedRequest:
    """Everything the runner needs to execute one action invocation."""
    action: str
    endpoint: str
    payload: Dict[str, Any]
    inline_mode: InlineMode = InlineMode.NONE


def format_validation_errors(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into 'field: message' strings."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "request"
        messages.append(f"{location}: {item['msg']}")
    return messages


class BaseAction(ABC):
    """
    One PDF.co operation.

    Subclasses declare a request model and map a validated request onto an
    endpoint and a payload. Payload assembly starts from the request's set
    fields (by API name), minus the control fields that only select the
    endpoint.
    """

    name: ClassVar[str]
    request_model: ClassVar[Type[ActionRequest]]

    # Request fields (API names) that pick the endpoint and are never sent
    control_fields: ClassVar[FrozenSet[str]] = frozenset()

    # Initial value of the payload's inline flag; None leaves it out
    default_inline: ClassVar[Optional[bool]] = None

    def validate(self, params: Mapping[str, Any]) -> ActionRequest:
        """
        Validate raw parameters into the action's request model.

        Raises:
            ActionValidationError: If parameters are missing or invalid
        """
        try:
            return self.request_model.model_validate(dict(params))
        except ValidationError as e:
            raise ActionValidationError(self.name, format_validation_errors(e)) from e

    @abstractmethod
    def endpoint(self, request: ActionRequest) -> str:
        """API path for this request."""
        pass

    def inline_mode(self, request: ActionRequest) -> InlineMode:
        """How inline result content is decoded (default: not fetched)."""
        return InlineMode.NONE

    def build_payload(self, request: ActionRequest) -> Dict[str, Any]:
        """Assemble the request payload."""
        payload: Dict[str, Any] = {"async": True}
        if self.default_inline is not None:
            payload["inline"] = self.default_inline

        for key, value in request.option_fields().items():
            if key not in self.control_fields:
                payload[key] = value

        return payload

    def prepare(self, params: Mapping[str, Any]) -> PreparedRequest:
        """Validate parameters and build the request for the runner."""
        request = self.validate(params)
        return PreparedRequest(
            action=self.name,
            endpoint=self.endpoint(request),
            payload=self.build_payload(request),
            inline_mode=self.inline_mode(request),
        )
