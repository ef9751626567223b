"""
Pydantic Schemas for Request/Response Validation

Every required field must be present and non-empty. Numbers sent for text
fields are accepted as their string form. Any validation failure
is answered by the route's own 400 message, never FastAPI's default 422.

Author: Khalil Bannouri
Version: 1.0.0
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(BaseModel):
    """Request schema for creating an account."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str = Field(..., min_length=1, examples=["john"])
    email: str = Field(..., min_length=1, examples=["john@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret"])


class LoginRequest(BaseModel):
    """Request schema for signing in."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    username: str = Field(..., min_length=1, examples=["john"])
    password: str = Field(..., min_length=1, examples=["s3cret"])


class OrderSubmission(BaseModel):
    """Request schema for placing a dish order."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(..., min_length=1, examples=["John Doe"])
    email: str = Field(..., min_length=1, examples=["john@example.com"])
    phone: str = Field(..., min_length=1, examples=["555-123-4567"])
    quantity: int = Field(..., ge=1, examples=[2])
    dish: str = Field(..., min_length=1, examples=["Butter Chicken"])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ApiResponse(BaseModel):
    """Envelope returned by every POST route."""
    success: bool
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    mail: str
    timestamp: datetime
