"""
Pydantic schemas for the auth and authors endpoints.
"""
from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of signup and login requests."""
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1, max_length=1024)


class AuthorResponse(BaseModel):
    """Public view of a user."""
    id: str
    email: str

    class Config:
        from_attributes = True


class SignupResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    token: str
    user: AuthorResponse
