"""Schemas shared across endpoints."""

from pydantic import BaseModel

# Identifiers are signed 64-bit integers in every supported database.
MAX_ID = 2**63 - 1


class CreatedResponse(BaseModel):
    """Identifier of a newly created resource."""

    id: int
