"""Connectors to external systems."""

from .base_connector import BaseConnector
from .credentials import Credentials
from .pdfco_connector import PdfcoConnector

__all__ = [
    "BaseConnector",
    "Credentials",
    "PdfcoConnector",
]
