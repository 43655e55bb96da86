"""
Clients API Endpoints

Endpoints:
- POST /clients/search - Ranked free-text search over the clients in the body
"""

import logging
from time import perf_counter

from fastapi import APIRouter, Request

from clinic_service.algorithms.client_matcher import display_name, search_clients
from clinic_service.api.common import build_proofs, get_trace_id, standard_response
from clinic_service.constants import short_request_id
from clinic_service.core.errors import AppError, InternalError, to_http_exception
from clinic_service.schemas.clients import ClientSearchRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("/search")
async def search(body: ClientSearchRequest, request: Request):
    """Search clients by name, contact details, notes, occupation or company."""
    trace_id = get_trace_id(request)
    started = perf_counter()

    try:
        results = search_clients(body.term, body.clients)

        data = {
            "term": body.term,
            "clients": [
                {**client.model_dump(), "display_name": display_name(client)}
                for client in results
            ],
            "total_count": len(results),
        }

        return standard_response(
            message=f"Found {len(results)} of {len(body.clients)} clients",
            data=data,
            proofs=build_proofs(
                "token_field_score",
                [{"type": "request_body", "clients": len(body.clients)}],
                started
            ),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Client search failed: {e}")
        raise to_http_exception(InternalError("Client search failed"))
