# =============================================================================
# main.py  -  Entry Point for the Telegram Assistant Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env (TELEGRAM_BOT_TOKEN, OPENROUTER_API_KEY, ...)
#   2. Creates the Google ADK agent (agent/telegram_agent.py), which spawns
#      the Telegram MCP server as a subprocess
#   3. Reads instructions from the terminal ("post 'deploy done' to
#      @mychannel", "react with 🔥 to message 42")
#   4. Streams the agent's events, printing each tool call it makes
#   5. Displays the agent's final answer
#
# The server itself refuses to start without TELEGRAM_BOT_TOKEN, so the
# same check runs here first to fail with a readable message.
# =============================================================================

import asyncio
import os
import sys

from dotenv import load_dotenv

# LiteLlm and the MCP subprocess both read the environment when the agent is
# created, so .env must be loaded first.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.telegram_agent import create_agent
from core.config import TOKEN_ENV_VAR

APP_NAME = "telegram_assistant"
USER_ID = "local_user"


async def run_agent():
    """Run the Telegram assistant interactively until the user quits."""

    print("=" * 70)
    print("  TELEGRAM ASSISTANT AGENT")
    print("  Powered by Google ADK + FastMCP + Telegram Bot API")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent initialized and ready!\n")
    print("💬 Tell the agent what to post or react to.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(
            role="user",
            parts=[types.Part(text=user_input)],
        )

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""

        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text

                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


def main() -> None:
    if not os.environ.get(TOKEN_ENV_VAR):
        print(f"Please set {TOKEN_ENV_VAR} environment variable", file=sys.stderr)
        sys.exit(1)
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
