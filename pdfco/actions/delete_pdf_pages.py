"""Delete pages from a PDF."""

from pdfco.schemas.editing import DeletePdfPagesRequest
from .base import BaseAction


class DeletePdfPagesAction(BaseAction):
    name = "delete_pdf_pages"
    request_model = DeletePdfPagesRequest
    default_inline = True

    def endpoint(self, request: DeletePdfPagesRequest) -> str:
        return "/v1/pdf/edit/delete-pages"
