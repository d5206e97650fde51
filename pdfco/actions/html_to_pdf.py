"""Render a web page, raw HTML, or an HTML template to PDF."""

from typing import Any, Dict

from pdfco.schemas.conversion import HtmlToPdfRequest
from .base import BaseAction


class HtmlToPdfAction(BaseAction):
    name = "html_to_pdf"
    request_model = HtmlToPdfRequest
    control_fields = frozenset({"convertType", "custom"})

    def endpoint(self, request: HtmlToPdfRequest) -> str:
        if request.convert_type == "urlToPDF":
            return "/v1/pdf/convert/from/url"
        # Templates are rendered by the HTML endpoint
        return "/v1/pdf/convert/from/html"

    def build_payload(self, request: HtmlToPdfRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        if request.custom:
            payload["paperSize"] = request.custom
        return payload
