"""FastAPI route definitions for the Sessionize agent API."""

from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request
from langchain_core.messages import HumanMessage

from sessionize_agent.api.schemas import (
    ChatRequest,
    ChatResponse,
    HealthResponse,
    ToolCallRequest,
    ToolInfo,
)
from sessionize_agent.tools.dispatcher import OPERATIONS, ToolDispatcher, ToolResult

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_agent(request: Request):
    """Return the compiled agent from app state, or 503 if it is not available."""
    agent = getattr(request.app.state, "agent", None)
    if agent is None:
        raise HTTPException(
            status_code=503,
            detail="The chat agent is not available. Please try again in a moment.",
        )
    return agent


def _get_dispatcher(request: Request) -> ToolDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="The tool dispatcher is not ready yet.")
    return dispatcher


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse()


@router.get("/tools", response_model=list[ToolInfo])
async def list_tools():
    """Describe every tool and the argument it requires, if any."""
    return [
        ToolInfo(
            name=op.name,
            description=op.description,
            argument=op.argument,
            argument_description=op.argument_description,
        )
        for op in OPERATIONS.values()
    ]


@router.post("/tools/{tool_name}", response_model=ToolResult)
async def call_tool(tool_name: str, request: ToolCallRequest, http_request: Request):
    """Invoke one tool directly.

    Usage errors, upstream errors and empty results all come back as a
    200 response; ``is_error`` tells them apart.
    """
    op = OPERATIONS.get(tool_name)
    if op is None:
        raise HTTPException(status_code=404, detail=f"Unknown tool: {tool_name}")

    dispatcher = _get_dispatcher(http_request)
    request_id = getattr(http_request.state, "request_id", "?")
    arguments = {op.argument: request.arguments.get(op.argument)} if op.argument else {}
    result = await dispatcher.acall(tool_name, request.event_id, **arguments)
    logger.info("[%s] tool %s -> %s", request_id, tool_name, "error" if result.is_error else "ok")
    return result


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, http_request: Request):
    """Send a message to the concierge agent and get a response.

    The session_id keys the conversation memory, so follow-up questions
    from the same session see the earlier turns.  ``agent.invoke()`` blocks
    on the LLM and Sessionize calls, so it runs in a worker thread.
    """
    agent = _get_agent(http_request)
    request_id = getattr(http_request.state, "request_id", "?")

    try:
        result = await asyncio.to_thread(
            agent.invoke,
            {"messages": [HumanMessage(content=request.message)]},
            config={"configurable": {"thread_id": request.session_id}},
        )

        messages = result.get("messages", [])
        if not messages:
            logger.error("[%s] Agent returned no messages", request_id)
            raise HTTPException(status_code=500, detail="Agent produced no response.")

        last_message = messages[-1]
        reply = last_message.content if hasattr(last_message, "content") else str(last_message)
        return ChatResponse(reply=reply, session_id=request.session_id)

    except HTTPException:
        raise
    except Exception as e:
        # Full traceback stays in the server log; the client gets a generic message
        logger.exception("[%s] Error processing chat request", request_id)
        raise HTTPException(
            status_code=500,
            detail="An internal error occurred. Please try again.",
        ) from e
