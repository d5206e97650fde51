"""Request schema for the AI invoice parser."""

from typing import Optional

from pydantic import Field

from .common import ActionRequest


class AiInvoiceParserRequest(ActionRequest):
    url: str = Field(description="URL of a PDF holding a single invoice")
    customfield: Optional[str] = Field(
        default=None, description="Extra fields to extract, comma separated"
    )
    callback: Optional[str] = Field(default=None, description="Webhook URL notified on completion")
