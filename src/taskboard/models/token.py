"""
Token schemas for the Taskboard backend
"""
from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Response body for a successful login"""
    model_config = ConfigDict(populate_by_name=True)

    token: str
    token_type: str = Field(default="bearer", alias="tokenType")
    expires_in: int = Field(alias="expiresIn")
