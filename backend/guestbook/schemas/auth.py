"""Auth Schemas — admin login request and token responses.

Invariants:
    - Missing username/password are accepted here and rejected by the route
      with a 400 envelope, matching the message endpoints
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    success: bool = True
    token: str


class SuccessResponse(BaseModel):
    success: bool = True
