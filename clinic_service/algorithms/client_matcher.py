"""
Client Matching Algorithm

Matches the free-text identifier of an uploaded scan (a person's name or a
national ID number) to a client record.

1. If the identifier looks like an ID number (10-13 digits) and exactly one
   candidate carries that id_number, it wins without any scoring.
2. Otherwise every candidate is scored by how well its first/last name
   matches the identifier's tokens; zero scores are dropped and the highest
   score wins. Ties keep input order (stable sort).

Also provides the ranked client search used by the client list and the
display_name accessor.

Pure and deterministic: O(n) over the candidates, no I/O. Callers fetch
candidates (typically all clients) beforehand.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as SchemaValidationError

from clinic_service.constants import (
    ID_NUMBER_PATTERN,
    MATCH_PATH_FUZZY,
    MATCH_PATH_ID_NUMBER,
    MATCH_PATH_NONE,
    MATCH_WEIGHT_FULL_NAME,
    MATCH_WEIGHT_REVERSED_NAME,
    MATCH_WEIGHT_TOKEN_CONTAINED,
    MATCH_WEIGHT_TOKEN_EXACT,
    MATCH_WEIGHT_TOKEN_PREFIX,
    SEARCH_WEIGHT_FIELD_CONTAINS,
    SEARCH_WEIGHT_FIELD_EXACT,
    SEARCH_WEIGHT_FIELD_PREFIX,
    SEARCH_WEIGHT_NAME_EXACT,
    is_match,
)
from clinic_service.core.errors import ValidationError
from clinic_service.schemas.clients import ClientRecord, MatchScore

logger = logging.getLogger(__name__)

# Fields searched by search_clients, in display order
SEARCHABLE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "city",
    "province",
    "postal_code",
    "notes",
    "occupation",
    "company",
)


# ============================================================================
# Helpers
# ============================================================================


def _normalize(text: Optional[str]) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join((text or "").lower().split())


def _join_name(first: str, last: str) -> str:
    return " ".join(part for part in (first, last) if part)


def _coerce_clients(candidates: Optional[Iterable[Any]]) -> List[ClientRecord]:
    result = []
    for candidate in candidates or []:
        if isinstance(candidate, ClientRecord):
            result.append(candidate)
            continue
        try:
            result.append(ClientRecord.model_validate(candidate))
        except SchemaValidationError as e:
            raise ValidationError(
                "Invalid client record",
                details={"client": repr(candidate), "errors": str(e)}
            )
    return result


def _require_identifier(identifier: Any) -> str:
    if not isinstance(identifier, str) or not identifier.strip():
        raise ValidationError(
            "Identifier must be a non-empty name or ID number",
            details={"identifier": repr(identifier)}
        )
    return identifier.strip()


def display_name(client: ClientRecord) -> str:
    """
    Human-readable name for a client.

    Falls back from full_name, to "first last", to email, to the record id.
    """
    if client.full_name and client.full_name.strip():
        return client.full_name.strip()

    name = _join_name((client.first_name or "").strip(), (client.last_name or "").strip())
    if name:
        return name

    if client.email and client.email.strip():
        return client.email.strip()

    return client.id


# ============================================================================
# Scoring
# ============================================================================


def score(identifier: str, candidate: ClientRecord) -> int:
    """
    Score how well a client's name matches the identifier.

    - full name ("first last") equals the identifier: +10
    - reversed name ("last first") equals the identifier: +9
    - per token: +1 if inside the full name, +3 more if it equals the first
      or last name, +2 more if it is a prefix of the first or last name

    Comparison is case-insensitive with whitespace collapsed.

    Example:
        >>> score("Jane Smith", ClientRecord(id="c1", first_name="Jane", last_name="Smith"))
        22
    """
    ident = _normalize(identifier)
    if not ident:
        return 0

    first = _normalize(candidate.first_name)
    last = _normalize(candidate.last_name)
    full_name = _join_name(first, last)
    reversed_name = _join_name(last, first)

    total = 0

    if full_name and full_name == ident:
        total += MATCH_WEIGHT_FULL_NAME
    if reversed_name and reversed_name == ident:
        total += MATCH_WEIGHT_REVERSED_NAME

    for token in ident.split(" "):
        if token in full_name:
            total += MATCH_WEIGHT_TOKEN_CONTAINED
        if token == first or token == last:
            total += MATCH_WEIGHT_TOKEN_EXACT
        if (first and first.startswith(token)) or (last and last.startswith(token)):
            total += MATCH_WEIGHT_TOKEN_PREFIX

    return total


def _ranked(identifier: str, clients: List[ClientRecord]) -> List[Tuple[ClientRecord, int]]:
    scored = [(client, score(identifier, client)) for client in clients]
    scored = [(client, value) for client, value in scored if is_match(value)]
    # sort() is stable: equal scores keep input order
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def _match_by_id_number(identifier: str, clients: List[ClientRecord]) -> Optional[ClientRecord]:
    if not ID_NUMBER_PATTERN.match(identifier):
        return None

    hits = [
        client for client in clients
        if client.id_number and client.id_number.strip() == identifier
    ]
    if len(hits) == 1:
        return hits[0]

    if len(hits) > 1:
        logger.warning(f"ID number matches {len(hits)} clients, falling back to name scoring")
    return None


# ============================================================================
# Public API
# ============================================================================


def rank_candidates(identifier: str, candidates: Iterable[Any]) -> List[MatchScore]:
    """
    Score every candidate and return the non-zero scores, best first.

    Raises:
        ValidationError: If the identifier is empty
    """
    ident = _require_identifier(identifier)
    clients = _coerce_clients(candidates)
    return [
        MatchScore(client_id=client.id, score=value)
        for client, value in _ranked(ident, clients)
    ]


def match_client(identifier: str, candidates: Iterable[Any]) -> Dict[str, Any]:
    """
    Match an identifier to a client and report how the match was made.

    Returns:
        Dict with:
        - client: the matched ClientRecord or None
        - match_path: "id_number", "fuzzy" or "none"
        - ranking: List[MatchScore] from fuzzy scoring (empty on the ID path)

    Raises:
        ValidationError: If the identifier is empty
    """
    ident = _require_identifier(identifier)
    clients = _coerce_clients(candidates)

    by_id = _match_by_id_number(ident, clients)
    if by_id is not None:
        logger.debug(f"Matched identifier to client {by_id.id} by ID number")
        return {"client": by_id, "match_path": MATCH_PATH_ID_NUMBER, "ranking": []}

    ranked = _ranked(ident, clients)
    ranking = [MatchScore(client_id=client.id, score=value) for client, value in ranked]

    if not ranked:
        logger.debug(f"No client matched among {len(clients)} candidates")
        return {"client": None, "match_path": MATCH_PATH_NONE, "ranking": []}

    best, best_score = ranked[0]
    logger.debug(f"Matched identifier to client {best.id} with score {best_score}")
    return {"client": best, "match_path": MATCH_PATH_FUZZY, "ranking": ranking}


def find_best_match(identifier: str, candidates: Iterable[Any]) -> Optional[ClientRecord]:
    """
    Best matching client for a scan identifier, or None.

    Example:
        >>> clients = [
        ...     ClientRecord(id="c1", first_name="Jane", last_name="Smith"),
        ...     ClientRecord(id="c2", first_name="Jan", last_name="Smithy"),
        ... ]
        >>> find_best_match("Jane Smith", clients).id
        'c1'
    """
    return match_client(identifier, candidates)["client"]


def search_clients(term: str, clients: Iterable[Any]) -> List[ClientRecord]:
    """
    Ranked free-text client search.

    Every whitespace-separated token of the term must appear in at least one
    searchable field, otherwise the client is dropped. Matching fields add to
    the client's score; results are sorted best first with ties in input
    order. An empty term returns all clients unchanged.
    """
    records = _coerce_clients(clients)
    tokens = _normalize(term).split()
    if not tokens:
        return records

    scored: List[Tuple[ClientRecord, int]] = []

    for client in records:
        first = (client.first_name or "").lower()
        last = (client.last_name or "").lower()
        fields = [
            value.lower() for value in (getattr(client, name) for name in SEARCHABLE_FIELDS)
            if value
        ]

        total = 0
        all_tokens_match = True

        for token in tokens:
            token_matches = False
            for field in fields:
                if token not in field:
                    continue
                token_matches = True
                total += SEARCH_WEIGHT_FIELD_CONTAINS
                if field == token:
                    total += SEARCH_WEIGHT_FIELD_EXACT
                if first == token or last == token:
                    total += SEARCH_WEIGHT_NAME_EXACT
                if field.startswith(token):
                    total += SEARCH_WEIGHT_FIELD_PREFIX
            if not token_matches:
                all_tokens_match = False
                break

        if all_tokens_match:
            scored.append((client, total))

    scored.sort(key=lambda item: item[1], reverse=True)
    return [client for client, _ in scored]
