"""
Base Schemas

Core Pydantic models for the standard response envelope used by every
endpoint: {message, data, proofs}.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class Proofs(BaseModel):
    """
    Tracing information included in all responses.

    - trace_id: Request trace ID
    - sources: Data sources used (request body, clinic store)
    - algorithm: Algorithm identifier (e.g., "half_open_slot_walk")
    - latency_ms: Optional response time
    """
    trace_id: Optional[str] = Field(None, description="Request trace ID")
    sources: Optional[List[Any]] = Field(None, description="Data sources (list of dicts or strings)")
    algorithm: Optional[str] = Field(None, description="Algorithm identifier")
    latency_ms: Optional[float] = Field(None, description="Response time in milliseconds")

    model_config = ConfigDict(extra="allow")


class ApiResponse(BaseModel):
    """Standard success response structure."""
    message: str = Field(..., description="User-facing response message")
    data: Optional[Dict[str, Any]] = Field(None, description="Response data payload")
    proofs: Optional[Proofs] = Field(None, description="Proof/tracing information")

    model_config = ConfigDict(extra="allow")


class ErrorDetail(BaseModel):
    """
    Error body produced by AppError.to_dict().

    Returned under the "detail" key of non-2xx responses.
    """
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error context")
    trace_id: Optional[str] = Field(None, description="Request trace ID")
