# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server that exposes the Telegram tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the MCP surface over core/.  mcp_server.py:
#     1. Lists each tool with its registry descriptor, schema unchanged
#     2. Hands every call, known name or not, to core.dispatcher.dispatch()
#     3. Returns the single text block of the response envelope
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build Telegram payloads (core/telegram_client.py does)
#   - They do NOT decide how errors are reported (core/dispatcher.py does)
#   - They do NOT know about Google ADK
# =============================================================================
