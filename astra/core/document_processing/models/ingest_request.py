"""
Ingestion request schema.

Validates the JSON body the upload flow sends once a file has landed
in the object store. Field names follow the client's camelCase.

Dependencies: pydantic
System role: Data validation and contract definition
"""

import re
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
MSWORD_MIME_TYPE = "application/msword"
TEXT_MIME_TYPES = ("text/plain", "text/markdown")

SUPPORTED_MIME_TYPES = (PDF_MIME_TYPE, DOCX_MIME_TYPE, MSWORD_MIME_TYPE, *TEXT_MIME_TYPES)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [A-Za-z0-9._-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


class IngestRequest(BaseModel):
    """Request to ingest one uploaded document."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "uploadId": "0b5c7e8e-3f0a-4a59-9c1e-6b7f2d0f4d11",
                "storagePath": "7d4e.../1718000000000_board-minutes.pdf",
                "filename": "board minutes.pdf",
                "mimeType": "application/pdf",
                "teamId": "550e8400-e29b-41d4-a716-446655440000",
                "userId": "550e8400-e29b-41d4-a716-446655440001",
                "category": "governance",
            }
        },
    )

    upload_id: str = Field(..., alias="uploadId", min_length=1)
    storage_path: str = Field(..., alias="storagePath", min_length=1)
    filename: str = Field(..., min_length=1)
    mime_type: str = Field(..., alias="mimeType", min_length=1)
    team_id: UUID = Field(..., alias="teamId")
    user_id: UUID = Field(..., alias="userId")
    category: str | None = None
    file_size: int | None = Field(default=None, alias="fileSize", ge=0)

    @field_validator("storage_path", "filename")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def doc_category(self) -> str:
        """Classification label, defaulting to "other"."""
        return self.category or "other"

    @property
    def sanitized_filename(self) -> str:
        """Filename safe for storage keys and the chunk table."""
        return sanitize_filename(self.filename)
