"""
Request and wire schemas.

Action requests are validated here before any payload is assembled.
"""

from .common import ActionRequest
from .conversion import CONVERT_OPTIONS, ConvertFromPdfRequest, HtmlToPdfRequest
from .editing import (
    CompressPdfRequest,
    DeletePdfPagesRequest,
    ReplacePair,
    RotatePdfRequest,
    SearchReplaceDeleteRequest,
)
from .invoice import AiInvoiceParserRequest
from .job import JobAcceptance, JobStatusRecord
from .security import MakePdfSearchableRequest, PdfSecurityRequest

__all__ = [
    "ActionRequest",
    "AiInvoiceParserRequest",
    "CONVERT_OPTIONS",
    "CompressPdfRequest",
    "ConvertFromPdfRequest",
    "DeletePdfPagesRequest",
    "HtmlToPdfRequest",
    "JobAcceptance",
    "JobStatusRecord",
    "MakePdfSearchableRequest",
    "PdfSecurityRequest",
    "ReplacePair",
    "RotatePdfRequest",
    "SearchReplaceDeleteRequest",
]
