"""
Convert a PDF to another format.

Text-like outputs are fetched and attached inline; image conversions return
a JSON list of page image URLs; TIFF and Excel outputs stay as links.
"""

from typing import Any, Dict

from pdfco.core.materializer import InlineMode
from pdfco.schemas.conversion import ConvertFromPdfRequest
from .base import BaseAction

ENDPOINTS: Dict[str, str] = {
    "toCsv": "/v1/pdf/convert/to/csv",
    "toHtml": "/v1/pdf/convert/to/html",
    "toJpg": "/v1/pdf/convert/to/jpg",
    "toJson": "/v1/pdf/convert/to/json",
    "toJsonMeta": "/v1/pdf/convert/to/json-meta",
    "toJson2": "/v1/pdf/convert/to/json2",
    "toPng": "/v1/pdf/convert/to/png",
    "toText": "/v1/pdf/convert/to/text",
    "toTextSimple": "/v1/pdf/convert/to/text-simple",
    "toTiff": "/v1/pdf/convert/to/tiff",
    "toXls": "/v1/pdf/convert/to/xls",
    "toXlsx": "/v1/pdf/convert/to/xlsx",
    "toXml": "/v1/pdf/convert/to/xml",
    "toWebp": "/v1/pdf/convert/to/webp",
}

BINARY_TYPES = frozenset({"toTiff", "toXls", "toXlsx"})
IMAGE_TYPES = frozenset({"toJpg", "toPng", "toWebp"})


class ConvertFromPdfAction(BaseAction):
    name = "convert_from_pdf"
    request_model = ConvertFromPdfRequest
    control_fields = frozenset({"convertType"})
    default_inline = True

    def endpoint(self, request: ConvertFromPdfRequest) -> str:
        return ENDPOINTS[request.convert_type]

    def inline_mode(self, request: ConvertFromPdfRequest) -> InlineMode:
        if request.convert_type in BINARY_TYPES:
            return InlineMode.NONE
        if request.convert_type in IMAGE_TYPES:
            return InlineMode.JSON
        return InlineMode.TEXT

    def build_payload(self, request: ConvertFromPdfRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        # unwrap only applies together with line grouping
        if "lineGrouping" not in payload:
            payload.pop("unwrap", None)
        return payload
