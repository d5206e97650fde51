"""Delete text, replace text, or replace text with an image inside a PDF."""

from typing import Any, Dict

from pdfco.schemas.editing import SearchReplaceDeleteRequest
from .base import BaseAction

ENDPOINTS = {
    "delete": "/v1/pdf/edit/delete-text",
    "replace": "/v1/pdf/edit/replace-text",
    "replaceWithImage": "/v1/pdf/edit/replace-text-with-image",
}


class SearchReplaceDeleteAction(BaseAction):
    name = "search_replace_delete"
    request_model = SearchReplaceDeleteRequest
    control_fields = frozenset({"operationType", "replacements", "searchStrings"})
    default_inline = True

    def endpoint(self, request: SearchReplaceDeleteRequest) -> str:
        return ENDPOINTS[request.operation_type]

    def build_payload(self, request: SearchReplaceDeleteRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)

        if request.operation_type == "delete":
            payload["searchStrings"] = [s for s in request.search_strings if s]
        elif request.operation_type == "replace":
            # Blank entries are dropped from each list independently
            payload["searchStrings"] = [
                p.search_string for p in request.replacements if p.search_string
            ]
            payload["replaceStrings"] = [
                p.replace_string for p in request.replacements if p.replace_string
            ]

        return payload
