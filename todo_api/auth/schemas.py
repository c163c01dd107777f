"""
Todo API - Authentication Schemas

Pydantic models for authentication requests and responses.
"""

from pydantic import BaseModel


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""

    username: str
    password: str


class UserLoginRequest(BaseModel):
    """Request schema for user login."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Response schema for successful authentication."""

    token: str
    username: str


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
