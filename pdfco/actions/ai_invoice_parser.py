"""AI invoice parser: extract structured invoice data from a PDF."""

from typing import Any, Dict

from pdfco.schemas.invoice import AiInvoiceParserRequest
from .base import BaseAction


class AiInvoiceParserAction(BaseAction):
    name = "ai_invoice_parser"
    request_model = AiInvoiceParserRequest

    def endpoint(self, request: AiInvoiceParserRequest) -> str:
        return "/v1/ai-invoice-parser"

    def build_payload(self, request: AiInvoiceParserRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        # The parser expects the key even when no custom fields are wanted
        payload.setdefault("customfield", "")
        return payload
