"""Sessionize Agent — conference event data as tools for AI agents.

Architecture Overview
=====================

The core is a small **tool-dispatch layer** over the public Sessionize API:

1. **SessionizeClient** — three read-only GET calls (speakers, sessions,
   schedule) with retries for timeouts and 5xx responses.
2. **Normalizer** — flattens session groups and turns ``null`` into empty
   sequences.
3. **Formatter** — renders speakers, sessions and the schedule as markdown.
4. **Queries** — list-all, find-by-substring, sessions-by-speaker, schedule.
5. **ToolDispatcher** — resolves the event ID, validates arguments and turns
   every failure into a ``ToolResult`` instead of an exception.

Routing for the concierge agent:
router → (chat?) → smalltalk → END
router → (event?) → chatbot → (tool calls?) → tools → chatbot (loop)

Package Structure
-----------------
- ``sessionize_agent/config.py`` — configuration from environment variables
- ``sessionize_agent/models.py`` — immutable Sessionize data models
- ``sessionize_agent/services/`` — Sessionize HTTP client and metrics
- ``sessionize_agent/tools/`` — normalizer, formatter, queries, dispatcher and
  LangChain tool bindings
- ``sessionize_agent/prompts.py`` — system prompt and prompt templates
- ``sessionize_agent/agent.py`` — LangGraph StateGraph definition
- ``sessionize_agent/mcp_server.py`` — MCP server (stdio)
- ``sessionize_agent/server.py`` — FastAPI application
- ``sessionize_agent/main.py`` — CLI chat interface
"""
