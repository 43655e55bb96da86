"""
Client Schemas

Pydantic models for client records read from the clinic data store and for
the matching/search request bodies. The matcher only reads client records.
"""

from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ClientRecord(BaseModel):
    """
    Client record.

    Only id and the name fields matter for matching; the contact fields are
    used by client search. Unknown store fields are kept (extra="allow").
    """
    id: str = Field(..., description="Client document ID")
    first_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("first_name", "firstName")
    )
    last_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("last_name", "lastName")
    )
    id_number: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("id_number", "idNumber"),
        description="National ID number",
    )
    full_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("full_name", "fullName")
    )
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = Field(
        None, validation_alias=AliasChoices("province", "state")
    )
    postal_code: Optional[str] = Field(
        None, validation_alias=AliasChoices("postal_code", "postalCode")
    )
    notes: Optional[str] = None
    occupation: Optional[str] = None
    company: Optional[str] = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class MatchScore(BaseModel):
    """Score of one candidate within a single matching call."""
    client_id: str
    score: int = Field(..., ge=0)


# ============================================================================
# Request Bodies
# ============================================================================

class MatchRequest(BaseModel):
    """Request body for matching a scan identifier to a client."""
    identifier: str = Field(..., description="Name or national ID number")
    candidates: List[ClientRecord] = Field(default_factory=list)


class ClientSearchRequest(BaseModel):
    """Request body for ranked client search."""
    term: str = Field("", description="Free-text search term")
    clients: List[ClientRecord] = Field(default_factory=list)
