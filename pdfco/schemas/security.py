"""Request schemas for security and OCR actions."""

from typing import Literal, Optional

from pydantic import Field, model_validator

from .common import DocumentPassword, OutputOptions, SourceAccess

EncryptionAlgorithm = Literal["AES_128bit", "AES_256bit", "RC4_40bit", "RC4_128bit"]

# Fields that only make sense when adding protection
ADD_SECURITY_FIELDS = (
    "owner_password", "user_password", "encryption_algorithm",
    "allow_accessibility_support", "allow_assembly_document", "allow_print_document",
    "allow_fill_forms", "allow_modify_document", "allow_content_extraction",
    "allow_modify_annotations", "print_quality",
)


class PdfSecurityRequest(OutputOptions):
    """Add or remove password protection and permissions."""

    url: str = Field(description="URL of the source PDF")
    mode: Literal["add_security", "remove_security"] = "add_security"

    # add_security
    owner_password: Optional[str] = Field(default=None, alias="ownerPassword")
    user_password: Optional[str] = Field(default=None, alias="userPassword")
    encryption_algorithm: Optional[EncryptionAlgorithm] = Field(default=None, alias="encryptionAlgorithm")
    allow_accessibility_support: Optional[bool] = Field(default=None, alias="allowAccessibilitySupport")
    allow_assembly_document: Optional[bool] = Field(default=None, alias="allowAssemblyDocument")
    allow_print_document: Optional[bool] = Field(default=None, alias="allowPrintDocument")
    allow_fill_forms: Optional[bool] = Field(default=None, alias="allowFillForms")
    allow_modify_document: Optional[bool] = Field(default=None, alias="allowModifyDocument")
    allow_content_extraction: Optional[bool] = Field(default=None, alias="allowContentExtraction")
    allow_modify_annotations: Optional[bool] = Field(default=None, alias="allowModifyAnnotations")
    print_quality: Optional[Literal["HighResolution", "LowResolution"]] = Field(
        default=None, alias="printQuality"
    )

    # remove_security
    password: Optional[str] = Field(default=None, description="Current password of the PDF")

    @model_validator(mode="after")
    def check_mode_fields(self) -> "PdfSecurityRequest":
        if self.mode == "remove_security":
            if self.password is None:
                raise ValueError("remove_security requires: password")
            stray = [f for f in ADD_SECURITY_FIELDS if getattr(self, f) is not None]
            if stray:
                raise ValueError(f"Options only valid for add_security: {', '.join(stray)}")
        elif self.password is not None:
            raise ValueError("password is only used by remove_security; use owner_password/user_password")
        return self


class MakePdfSearchableRequest(OutputOptions, SourceAccess, DocumentPassword):
    """OCR a scanned PDF into a searchable one, or strip its text layer."""

    url: str = Field(description="URL of the source PDF")
    mode: Literal["makeSearchable", "makeUnsearchable"] = Field(
        default="makeSearchable", alias="searchableOptions"
    )
    lang: Optional[str] = Field(default=None, description="OCR language (makeSearchable)")
    pages: Optional[str] = None
