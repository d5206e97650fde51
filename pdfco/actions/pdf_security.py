"""Add or remove PDF password protection."""

from pdfco.schemas.security import PdfSecurityRequest
from .base import BaseAction


class PdfSecurityAction(BaseAction):
    name = "pdf_security"
    request_model = PdfSecurityRequest
    control_fields = frozenset({"mode"})
    default_inline = True

    def endpoint(self, request: PdfSecurityRequest) -> str:
        if request.mode == "add_security":
            return "/v1/pdf/security/add"
        return "/v1/pdf/security/remove"
