"""Pydantic schemas for the FastAPI endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Incoming chat message from the frontend."""

    message: str = Field(..., min_length=1, max_length=2000, description="The user's message")
    session_id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique session identifier for conversation continuity",
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="The agent's response message")
    session_id: str = Field(..., description="The session ID for this conversation")


class ToolCallRequest(BaseModel):
    """Arguments for a direct tool invocation."""

    event_id: str = Field("", max_length=100, description="Sessionize event ID (optional)")
    arguments: dict[str, str] = Field(
        default_factory=dict,
        description="Tool-specific arguments, e.g. {\"name\": \"Jane\"} for find_speaker",
    )


class ToolInfo(BaseModel):
    name: str
    description: str
    argument: str | None = None
    argument_description: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = "sessionize-agent"
