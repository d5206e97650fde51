"""Make a scanned PDF searchable via OCR, or remove its text layer."""

from typing import Any, Dict

from pdfco.schemas.security import MakePdfSearchableRequest
from .base import BaseAction


class MakePdfSearchableAction(BaseAction):
    name = "make_pdf_searchable"
    request_model = MakePdfSearchableRequest
    control_fields = frozenset({"searchableOptions"})

    def endpoint(self, request: MakePdfSearchableRequest) -> str:
        if request.mode == "makeSearchable":
            return "/v1/pdf/makesearchable"
        return "/v1/pdf/makeunsearchable"

    def build_payload(self, request: MakePdfSearchableRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        if request.mode == "makeUnsearchable":
            payload.pop("lang", None)
        return payload
