"""
Scan Schemas

Pydantic models for parsed scan files and the ingest endpoint.
"""

from typing import List, Optional, Union
from pydantic import BaseModel, Field


class ScanPathValue(BaseModel):
    """One measured path of a scan, normalized to 0 or 1."""
    path_id: Union[int, str]
    description: str = ""
    value: int = Field(..., ge=0, le=1)


class ScanFile(BaseModel):
    """Parsed scan upload, before it is assigned to a client."""
    file_identifier: str
    user_id: Optional[str] = Field(None, description="Numeric ID found at the start of the identifier")
    person_name: Optional[str] = Field(None, description="Identifier kept as a name when no ID was found")
    original_filename: str
    upload_source: str = "manual"
    scan_date: str = Field(..., description="YYYY-MM-DD")
    scan_time: str = Field(..., description="HH:MM")
    status: str = Field(..., description="matched or unmatched")
    assignment_type: str = Field(..., description="auto or manual")
    path_data: List[ScanPathValue] = Field(default_factory=list)


class ScanIngestRequest(BaseModel):
    """Request body for ingesting a scan CSV."""
    content: str = Field(..., min_length=1, description="Raw CSV content")
    filename: str = Field(..., min_length=1, description="Original file name")


class ScanIngestResult(BaseModel):
    """Outcome of ingesting a scan and auto-matching it."""
    scan: ScanFile
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    match_path: str = Field(..., description="id_number, fuzzy or none")
