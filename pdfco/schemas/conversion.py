"""
Request schemas for conversion actions.

Covers PDF -> other formats and URL/HTML/template -> PDF.
"""

from typing import Dict, FrozenSet, Literal, Optional

from pydantic import Field, field_validator, model_validator

from .common import OutputOptions, SourceAccess

ConvertType = Literal[
    "toCsv", "toHtml", "toJpg", "toJson", "toJsonMeta", "toJson2", "toPng",
    "toText", "toTextSimple", "toTiff", "toWebp", "toXls", "toXlsx", "toXml",
]

_BASE_OPTIONS = frozenset({
    "pages", "name", "callback", "expiration", "httpusername", "httppassword", "profiles",
})
_TABLE_OPTIONS = _BASE_OPTIONS | {"lang", "rect", "lineGrouping", "unwrap"}
_IMAGE_OPTIONS = _BASE_OPTIONS | {"rect", "inline"}

# Options each conversion type accepts, by API name
CONVERT_OPTIONS: Dict[str, FrozenSet[str]] = {
    "toCsv": _TABLE_OPTIONS | {"inline"},
    "toHtml": _TABLE_OPTIONS | {"inline"},
    "toJson": _TABLE_OPTIONS | {"inline"},
    "toJsonMeta": _TABLE_OPTIONS | {"inline"},
    "toJson2": _TABLE_OPTIONS | {"inline"},
    "toText": _TABLE_OPTIONS | {"inline"},
    "toXml": _TABLE_OPTIONS | {"inline"},
    "toXls": _TABLE_OPTIONS,
    "toXlsx": _TABLE_OPTIONS,
    "toJpg": _IMAGE_OPTIONS,
    "toPng": _IMAGE_OPTIONS,
    "toWebp": _IMAGE_OPTIONS,
    "toTiff": _BASE_OPTIONS | {"rect"},
    "toTextSimple": _BASE_OPTIONS | {"inline"},
}


class ConvertFromPdfRequest(OutputOptions, SourceAccess):
    """PDF to CSV/HTML/JSON/text/XML/Excel/images."""

    url: str = Field(description="URL of the source PDF file")
    convert_type: ConvertType = Field(default="toText", alias="convertType")
    pages: Optional[str] = Field(default=None, description="Page indices/ranges, e.g. '0,2-5,7-'")
    lang: Optional[str] = Field(default=None, description="OCR language for scanned documents")
    rect: Optional[str] = Field(default=None, description="Area to extract: 'x y width height'")
    inline: Optional[bool] = Field(default=None, description="Return content instead of a link")
    line_grouping: Optional[Literal["1", "2", "3"]] = Field(default=None, alias="lineGrouping")
    unwrap: Optional[bool] = Field(default=None, description="Unwrap lines within table cells")

    @field_validator("line_grouping", mode="before")
    @classmethod
    def line_grouping_as_text(cls, value):
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def check_options_for_type(self) -> "ConvertFromPdfRequest":
        allowed = CONVERT_OPTIONS[self.convert_type]
        given = set(self.option_fields()) - {"url", "convertType"}
        unsupported = sorted(given - allowed)
        if unsupported:
            raise ValueError(
                f"Options not supported for {self.convert_type}: {', '.join(unsupported)}"
            )
        return self


HtmlConvertType = Literal["urlToPDF", "htmlToPDF", "htmlTemplateToPDF"]


class HtmlToPdfRequest(OutputOptions):
    """Web page, raw HTML or stored HTML template to PDF."""

    convert_type: HtmlConvertType = Field(default="urlToPDF", alias="convertType")
    url: Optional[str] = Field(default=None, description="Web page URL (urlToPDF)")
    html: Optional[str] = Field(default=None, description="HTML code (htmlToPDF)")
    template_id: Optional[str] = Field(default=None, alias="templateId")
    template_data: Optional[str] = Field(
        default=None, alias="templateData", description="JSON or CSV data for the template"
    )
    orientation: Optional[Literal["portrait", "landscape"]] = None
    paper_size: Optional[str] = Field(default=None, alias="paperSize", description="a4, letter, ...")
    custom: Optional[str] = Field(
        default=None, description="Custom paper size, e.g. '200mm 300mm'; overrides paperSize"
    )
    print_background: bool = Field(default=False, alias="printBackground")
    do_not_wait_full_load: bool = Field(default=False, alias="DoNotWaitFullLoad")
    margins: Optional[str] = Field(default=None, description="CSS-style margins, e.g. '10px 5px'")
    media_type: Optional[Literal["print", "screen", "none"]] = Field(default=None, alias="mediaType")
    header: Optional[str] = Field(default=None, description="HTML for the page header")
    footer: Optional[str] = Field(default=None, description="HTML for the page footer")

    @model_validator(mode="after")
    def check_source(self) -> "HtmlToPdfRequest":
        required = {
            "urlToPDF": ("url",),
            "htmlToPDF": ("html",),
            "htmlTemplateToPDF": ("template_id", "template_data"),
        }[self.convert_type]
        missing = [f for f in required if getattr(self, f) is None]
        if missing:
            raise ValueError(f"{self.convert_type} requires: {', '.join(missing)}")
        return self
