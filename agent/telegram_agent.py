# =============================================================================
# agent/telegram_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates a Google ADK agent whose only tools are the two Telegram tools
#   served by tools/mcp_server.py.
#
# HOW IT WORKS:
#
#   ┌────────────────────────────┐   stdio    ┌─────────────────────────┐
#   │  Google ADK Agent          │──────────▶│  FastMCP Server         │
#   │  LiteLlm (AGENT_MODEL)     │           │  (tools/mcp_server.py)  │
#   │  + system prompt           │◀──────────│  • telegram_send_message│
#   └────────────────────────────┘           │  • telegram_set_message_│
#                                            │    reaction             │
#                                            └─────────────────────────┘
#                                                        │ HTTPS
#                                                        ▼
#                                              api.telegram.org/bot<token>
#
# MCP CONNECTION:
#   ADK starts the server as a subprocess with the current interpreter
#   (`python -m tools.mcp_server`, run from the project root) and speaks MCP
#   over its stdin/stdout.  The MCP SDK only forwards a minimal environment
#   to the subprocess, so the bot token and Telegram settings are passed
#   explicitly.
#
# MODEL:
#   LiteLlm model string, default "openrouter/openai/gpt-4o".  Override with
#   AGENT_MODEL.  LiteLlm reads the provider key (e.g. OPENROUTER_API_KEY)
#   from the environment.
# =============================================================================

import os
import sys
from typing import Mapping, Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_telegram_assistant_prompt
from core.config import TOKEN_ENV_VAR

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

# Variables the server subprocess needs; everything else stays behind.
_FORWARDED_ENV_VARS = (TOKEN_ENV_VAR, "TELEGRAM_API_BASE", "LOG_LEVEL")


def server_parameters(environ: Optional[Mapping[str, str]] = None) -> StdioServerParameters:
    """Describe how ADK should launch the Telegram MCP server."""
    env = os.environ if environ is None else environ
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env={key: env[key] for key in _FORWARDED_ENV_VARS if key in env},
    )


def create_agent(
    model: Optional[str] = None,
    default_chat_id: Optional[str] = None,
) -> Agent:
    """Create the Telegram assistant agent.

    Args:
        model: LiteLlm model string; falls back to AGENT_MODEL, then
            DEFAULT_MODEL.
        default_chat_id: Chat the agent posts to when the user names none;
            falls back to TELEGRAM_DEFAULT_CHAT_ID.

    Returns:
        A configured Google ADK Agent instance.
    """
    mcp_tools = MCPToolset(connection_params=server_parameters())

    agent = Agent(
        name="telegram_assistant",
        model=LiteLlm(model=model or os.environ.get("AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_telegram_assistant_prompt(
            default_chat_id or os.environ.get("TELEGRAM_DEFAULT_CHAT_ID")
        ),
        tools=[mcp_tools],
    )

    return agent
