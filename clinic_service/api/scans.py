"""
Scans API Endpoints

Scan file ingestion and scan-to-client matching.

Endpoints:
- POST /scans/match - Match an identifier against candidate clients in the body
- POST /scans/ingest - Parse a scan CSV and auto-match it against the store's clients
"""

import logging
from time import perf_counter

from fastapi import APIRouter, Request

from clinic_service.algorithms.client_matcher import display_name, match_client
from clinic_service.algorithms.scan_identifier import identifier_for_matching, parse_scan_csv
from clinic_service.api.common import build_proofs, get_auth_header, get_trace_id, standard_response
from clinic_service.constants import (
    ASSIGNMENT_AUTO,
    ASSIGNMENT_MANUAL,
    MATCH_PATH_NONE,
    SCAN_STATUS_MATCHED,
    SCAN_STATUS_UNMATCHED,
    short_request_id,
)
from clinic_service.core.errors import AppError, InternalError, to_http_exception
from clinic_service.schemas.clients import MatchRequest
from clinic_service.schemas.scans import ScanIngestRequest, ScanIngestResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scans", tags=["scans"])

MATCH_ALGORITHM = "id_number_then_name_score"


@router.post("/match")
async def match(body: MatchRequest, request: Request):
    """
    Match a scan identifier (name or ID number) to one of the candidates.

    Returns the best client, how it was matched and the full fuzzy ranking.
    """
    trace_id = get_trace_id(request)
    started = perf_counter()

    try:
        outcome = match_client(body.identifier, body.candidates)
        client = outcome["client"]

        data = {
            "client": client.model_dump() if client else None,
            "client_id": client.id if client else None,
            "client_name": display_name(client) if client else None,
            "match_path": outcome["match_path"],
            "ranking": [item.model_dump() for item in outcome["ranking"]],
        }

        message = (
            f"Matched '{body.identifier}' to {data['client_name']}"
            if client else f"No client matched '{body.identifier}'"
        )

        return standard_response(
            message=message,
            data=data,
            proofs=build_proofs(
                MATCH_ALGORITHM,
                [{"type": "request_body", "candidates": len(body.candidates)}],
                started
            ),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Client matching failed: {e}")
        raise to_http_exception(InternalError("Client matching failed"))


@router.post("/ingest")
async def ingest(body: ScanIngestRequest, request: Request):
    """
    Parse an uploaded scan CSV and try to assign it to a client.

    A scan whose identifier matches a client (by ID number or by name) comes
    back "matched"/"auto"; otherwise it stays "unmatched"/"manual" for an
    operator to assign.
    """
    trace_id = get_trace_id(request)
    auth_header = get_auth_header(request)
    started = perf_counter()

    try:
        from clinic_service.tools import clinic_store_client

        scan = parse_scan_csv(body.content, body.filename)
        identifier = identifier_for_matching(scan)

        client = None
        match_path = MATCH_PATH_NONE
        candidate_count = 0

        if identifier:
            clients = await clinic_store_client.list_clients(auth_header=auth_header)
            candidate_count = len(clients)
            outcome = match_client(identifier, clients)
            client = outcome["client"]
            match_path = outcome["match_path"]

        if client is not None:
            scan = scan.model_copy(update={
                "status": SCAN_STATUS_MATCHED,
                "assignment_type": ASSIGNMENT_AUTO,
            })
        else:
            scan = scan.model_copy(update={
                "status": SCAN_STATUS_UNMATCHED,
                "assignment_type": ASSIGNMENT_MANUAL,
            })

        result = ScanIngestResult(
            scan=scan,
            client_id=client.id if client else None,
            client_name=display_name(client) if client else None,
            match_path=match_path
        )

        message = (
            f"Scan '{body.filename}' assigned to {result.client_name}"
            if client else f"Scan '{body.filename}' needs manual assignment"
        )
        logger.info(f"[{short_request_id(trace_id)}] {message} (path={match_path})")

        return standard_response(
            message=message,
            data=result.model_dump(),
            proofs=build_proofs(
                MATCH_ALGORITHM,
                [
                    {"type": "upload", "filename": body.filename},
                    {"type": "clients", "count": candidate_count},
                ],
                started
            ),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Scan ingest failed: {e}")
        raise to_http_exception(InternalError("Scan ingest failed"))
