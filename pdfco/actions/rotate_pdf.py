"""Rotate PDF pages, manually or by automatic orientation detection."""

from typing import Any, Dict

from pdfco.schemas.editing import RotatePdfRequest
from .base import BaseAction


class RotatePdfAction(BaseAction):
    name = "rotate_pdf"
    request_model = RotatePdfRequest
    control_fields = frozenset({"mode"})
    default_inline = True

    def endpoint(self, request: RotatePdfRequest) -> str:
        if request.mode == "auto":
            return "/v1/pdf/edit/rotate/auto"
        return "/v1/pdf/edit/rotate"

    def build_payload(self, request: RotatePdfRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        if request.mode == "auto":
            payload.pop("angle", None)
            payload.pop("pages", None)
        return payload
