"""
Shared API Helpers

Request accessors and the {message, data, proofs} response envelope used by
every router.
"""

from time import perf_counter
from typing import Any, Dict, List, Optional

from fastapi import Request

from clinic_service.constants import TRACE_HEADER_NAME, normalize_trace_id
from clinic_service.core.logging import get_trace_id as current_trace_id


def get_trace_id(request: Request) -> str:
    """Trace ID set by the middleware, else the request header, else a new one."""
    trace_id = getattr(request.state, "trace_id", None)
    if trace_id:
        return trace_id

    trace_id = current_trace_id()
    if trace_id and trace_id != "-":
        return trace_id

    return normalize_trace_id(request.headers.get(TRACE_HEADER_NAME))


def get_auth_header(request: Request) -> Optional[str]:
    """Extract Authorization header."""
    return request.headers.get("authorization")


def elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000, 2)


def standard_response(
    message: str,
    data: Optional[Dict[str, Any]] = None,
    proofs: Optional[Dict[str, Any]] = None,
    trace_id: Optional[str] = None
) -> Dict[str, Any]:
    """Build standard response format."""
    merged_proofs = {"trace_id": trace_id}
    if proofs:
        merged_proofs.update(proofs)

    return {
        "message": message,
        "data": data or {},
        "proofs": merged_proofs
    }


def build_proofs(
    algorithm: str,
    sources: List[Any],
    started: float
) -> Dict[str, Any]:
    """Proofs block for an algorithm run: what ran, on which data, how long."""
    return {
        "algorithm": algorithm,
        "sources": sources,
        "latency_ms": elapsed_ms(started)
    }
