"""Compress a PDF, optionally with a custom compression configuration."""

from typing import Any, Dict

from pdfco.core.normalizer import profiles_to_object
from pdfco.schemas.editing import CompressPdfRequest
from .base import BaseAction


class CompressPdfAction(BaseAction):
    name = "compress_pdf"
    request_model = CompressPdfRequest
    default_inline = True

    def endpoint(self, request: CompressPdfRequest) -> str:
        return "/v2/pdf/compress"

    def build_payload(self, request: CompressPdfRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        # v2 compress takes the configuration as an object under "config"
        return profiles_to_object(payload, "config")
