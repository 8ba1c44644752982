# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL of the Telegram translation logic.
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, the MCP SDK, or Google ADK.
#   The registry, the dispatcher and the Bot API client are plain Python
#   (plus httpx for the outbound call), so they can be imported and tested
#   without a running MCP host.
#
#   tools/ wraps this package in an MCP server.  agent/ drives that server.
# =============================================================================
