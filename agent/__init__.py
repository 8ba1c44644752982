# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains a Google ADK agent that uses the Telegram tools.
#
# ARCHITECTURAL ROLE:
#   The agent is an MCP *host*.  It starts tools/mcp_server.py as a stdio
#   subprocess, discovers telegram_send_message and
#   telegram_set_message_reaction, and lets the LLM decide when to call
#   them based on what the user asks in main.py.
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the Telegram client (that's in core/)
#   - It is NOT the MCP server (that's in tools/)
# =============================================================================
