"""CLI entry point for the Sessionize concierge agent.

A terminal chat loop for testing and development.  For production, use the
FastAPI server (sessionize_agent/server.py) or the MCP server
(sessionize_agent/mcp_server.py).

Besides free-text questions, the loop understands a few slash commands that
bypass the LLM and call the tools directly:

    /tools                              list the tools and their arguments
    /call <tool> [event_id] [argument]  run one tool ("-" = default event)
    /new                                start a new conversation
    /quit                               exit

Without an Anthropic API key only the slash commands are available.

Usage:
    python -m sessionize_agent.main            # normal mode (quiet)
    python -m sessionize_agent.main --debug    # debug mode (shows API calls)
"""

from __future__ import annotations

import argparse
import logging
import shlex
import uuid

from langchain_core.messages import HumanMessage

from sessionize_agent.agent import create_concierge_agent
from sessionize_agent.config import SESSIONIZE_EVENT_ID
from sessionize_agent.tools.dispatcher import OPERATIONS, ToolDispatcher, get_dispatcher

logger = logging.getLogger(__name__)

NAME = "Sessie"


def _configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.DEBUG if debug else logging.WARNING)


def describe_tools() -> str:
    lines = []
    for op in OPERATIONS.values():
        usage = f"/call {op.name} [event_id]"
        if op.argument:
            usage += f" <{op.argument}>"
        lines.append(f"  {usage}")
    return "\n".join(lines)


def run_command(line: str, dispatcher: ToolDispatcher) -> str:
    """Execute a ``/call`` or ``/tools`` command and return what to print."""
    try:
        words = shlex.split(line)
    except ValueError as exc:
        return f"Cannot parse command: {exc}"

    command, args = words[0].lower(), words[1:]
    if command == "/tools":
        return describe_tools()
    if command != "/call":
        return f"Unknown command: {command}. Try /tools."
    if not args:
        return "Usage: /call <tool> [event_id] [argument]"

    tool_name, rest = args[0], args[1:]
    op = OPERATIONS.get(tool_name)
    if op is None:
        return f"Unknown tool: {tool_name}. Try /tools."

    event_id = rest[0] if rest and rest[0] != "-" else ""
    arguments = {op.argument: " ".join(rest[1:])} if op.argument else {}
    result = dispatcher.call(tool_name, event_id, **arguments)
    return f"[error] {result.text}" if result.is_error else result.text


def _ask_agent(agent, text: str, session_id: str) -> str:
    result = agent.invoke(
        {"messages": [HumanMessage(content=text)]},
        config={"configurable": {"thread_id": session_id}},
    )
    messages = result.get("messages", [])
    if not messages:
        return "Sorry, I couldn't come up with an answer. Please try again."
    return str(messages[-1].content)


def _print_banner(agent_ready: bool) -> None:
    print("\n" + "=" * 60)
    print("  Sessionize Concierge - CLI")
    print("=" * 60)
    if SESSIONIZE_EVENT_ID:
        print(f"  Default event: {SESSIONIZE_EVENT_ID}")
    else:
        print("  No default event: pass an event ID to every question or /call.")
    if not agent_ready:
        print("  Chat disabled (no Anthropic API key); slash commands only.")
    print("  Commands: /tools, /call, /new, /quit")
    print("=" * 60 + "\n")


def main():
    """Run the interactive CLI loop."""
    parser = argparse.ArgumentParser(description="Sessionize concierge CLI")
    parser.add_argument(
        "--debug", action="store_true",
        help="Show all log messages including HTTP requests",
    )
    args = parser.parse_args()
    _configure_logging(debug=args.debug)

    dispatcher = get_dispatcher()
    try:
        agent = create_concierge_agent()
    except OSError as exc:
        logger.warning("Chat agent disabled: %s", exc)
        agent = None

    _print_banner(agent is not None)
    session_id = str(uuid.uuid4())

    while True:
        try:
            user_input = input("You: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_input:
            continue
        if user_input.lower() in ("/quit", "quit", "exit"):
            print("Goodbye! Enjoy the conference!")
            break
        if user_input.lower() == "/new":
            session_id = str(uuid.uuid4())
            print(f">> New session started: {session_id[:8]}...\n")
            continue
        if user_input.startswith("/"):
            print(run_command(user_input, dispatcher) + "\n")
            continue
        if agent is None:
            print("Chat is disabled. Use /call, or set ANTHROPIC_API_KEY.\n")
            continue

        try:
            print(f"\n{NAME}: {_ask_agent(agent, user_input, session_id)}\n")
        except Exception as e:
            logger.exception("Error processing message")
            print(f"\n{NAME}: Sorry, something went wrong: {e}\n")


if __name__ == "__main__":
    main()
