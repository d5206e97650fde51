"""
Shared request schema pieces.

Field names are snake_case; aliases carry the API parameter names so a
request can be built from either spelling and dumped straight into a payload.
Blank strings are treated as "not set" everywhere, matching the editor
behaviour where an untouched text box holds ''. Numbers given for text
options (pages '0', numeric passwords) are read as text.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

ProfilesValue = Union[str, Dict[str, Any], List[Any]]


class ActionRequest(BaseModel):
    """Base class for every action request."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value.strip():
            field = cls.model_fields[info.field_name]
            if field.is_required():
                return None
            return field.get_default(call_default_factory=True)
        return value

    def option_fields(self) -> Dict[str, Any]:
        """Set fields keyed by API name, None values dropped."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SourceUrl(ActionRequest):
    url: str = Field(description="URL of the source PDF file")


class OutputOptions(ActionRequest):
    """Options accepted by nearly every document-producing endpoint."""

    name: Optional[str] = Field(default=None, description="Output file name")
    callback: Optional[str] = Field(default=None, description="Webhook URL notified on completion")
    expiration: Optional[int] = Field(
        default=None, ge=0, description="Output link expiration in minutes"
    )
    profiles: Optional[ProfilesValue] = Field(
        default=None, description="Custom profile JSON (relaxed quoting accepted)"
    )

    @field_validator("expiration")
    @classmethod
    def zero_expiration_is_unset(cls, value: Optional[int]) -> Optional[int]:
        return value or None


class SourceAccess(ActionRequest):
    """HTTP basic credentials for fetching the source URL."""

    httpusername: Optional[str] = Field(default=None, description="HTTP username for the source URL")
    httppassword: Optional[str] = Field(default=None, description="HTTP password for the source URL")


class DocumentPassword(ActionRequest):
    password: Optional[str] = Field(default=None, description="Password of a protected PDF")
