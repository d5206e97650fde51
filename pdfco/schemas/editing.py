"""Request schemas for document editing actions."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import DocumentPassword, OutputOptions, SourceAccess


class CompressPdfRequest(OutputOptions, SourceAccess, DocumentPassword):
    """
    Compress a PDF.

    ``profiles`` here is the custom compression configuration; it is sent
    as a nested ``config`` object rather than a JSON string.
    """

    url: str = Field(description="URL of the PDF to compress")


class DeletePdfPagesRequest(OutputOptions, SourceAccess):
    url: str = Field(description="URL of the source PDF")
    pages: str = Field(description="Pages to delete, e.g. '1,3-5'")


class RotatePdfRequest(OutputOptions, SourceAccess):
    """Rotate pages by a fixed angle, or let the service detect orientation."""

    url: str = Field(description="URL of the source PDF")
    mode: Literal["auto", "manual"] = "auto"
    angle: Literal[90, 180, 270] = 90
    pages: Optional[str] = Field(default=None, description="Pages to rotate (manual mode)")
    lang: Optional[str] = Field(default=None, description="OCR language used for auto detection")

    @model_validator(mode="before")
    @classmethod
    def angle_from_string(cls, data):
        # Editors hand the angle over as '90', '180', '270'
        if isinstance(data, dict) and isinstance(data.get("angle"), str):
            angle = data["angle"].strip()
            data = {k: v for k, v in data.items() if k != "angle"}
            if angle:
                data["angle"] = int(angle)
        return data


class ReplacePair(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, coerce_numbers_to_str=True)

    search_string: Optional[str] = Field(default=None, alias="searchString")
    replace_string: Optional[str] = Field(default=None, alias="replaceString")


class SearchReplaceDeleteRequest(OutputOptions, SourceAccess, DocumentPassword):
    """Delete text, replace text, or replace text with an image."""

    url: str = Field(description="URL of the source PDF")
    operation_type: Literal["delete", "replace", "replaceWithImage"] = Field(
        default="replace", alias="operationType"
    )
    search_strings: List[str] = Field(default_factory=list, alias="searchStrings")
    replacements: List[ReplacePair] = Field(default_factory=list)
    search_string: Optional[str] = Field(
        default=None, alias="searchString", description="Text to replace with an image"
    )
    replace_image: Optional[str] = Field(
        default=None, alias="replaceImage", description="Image URL used as replacement"
    )
    pages: Optional[str] = None
    replacement_limit: Optional[int] = Field(default=None, ge=0, alias="replacementLimit")
    regex: Optional[bool] = Field(default=None, description="Treat search strings as regular expressions")
    case_sensitive: Optional[bool] = Field(default=None, alias="caseSensitive")

    @model_validator(mode="after")
    def check_operation(self) -> "SearchReplaceDeleteRequest":
        used_by = {
            "searchStrings": ("delete", bool(self.search_strings)),
            "replacements": ("replace", bool(self.replacements)),
            "searchString": ("replaceWithImage", self.search_string is not None),
            "replaceImage": ("replaceWithImage", self.replace_image is not None),
        }
        stray = [
            name for name, (operation, given) in used_by.items()
            if given and operation != self.operation_type
        ]
        if stray:
            raise ValueError(f"Options not used by {self.operation_type}: {', '.join(stray)}")

        if self.operation_type == "replaceWithImage":
            missing = [
                name for name, value in (
                    ("searchString", self.search_string),
                    ("replaceImage", self.replace_image),
                ) if value is None
            ]
            if missing:
                raise ValueError(f"replaceWithImage requires: {', '.join(missing)}")
        return self
