"""
Action registry.

Maps action names to implementation classes.
"""

from typing import Dict, List, Type

from pdfco.core.errors import UnknownActionError
from .ai_invoice_parser import AiInvoiceParserAction
from .base import BaseAction
from .compress_pdf import CompressPdfAction
from .convert_from_pdf import ConvertFromPdfAction
from .delete_pdf_pages import DeletePdfPagesAction
from .html_to_pdf import HtmlToPdfAction
from .make_pdf_searchable import MakePdfSearchableAction
from .pdf_security import PdfSecurityAction
from .rotate_pdf import RotatePdfAction
from .search_replace_delete import SearchReplaceDeleteAction


# Registry mapping action names to action classes
ACTION_TYPES: Dict[str, Type[BaseAction]] = {
    cls.name: cls
    for cls in (
        AiInvoiceParserAction,
        CompressPdfAction,
        ConvertFromPdfAction,
        DeletePdfPagesAction,
        HtmlToPdfAction,
        MakePdfSearchableAction,
        PdfSecurityAction,
        RotatePdfAction,
        SearchReplaceDeleteAction,
    )
}


def list_actions() -> List[str]:
    """Registered action names, sorted."""
    return sorted(ACTION_TYPES)


def create_action(name: str) -> BaseAction:
    """
    Factory function to create action instances.

    Raises:
        UnknownActionError: If no action has this name
    """
    action_class = ACTION_TYPES.get(name)
    if action_class is None:
        raise UnknownActionError(name, list_actions())
    return action_class()
