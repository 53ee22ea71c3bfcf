"""Allow running the MCP server as a module.

Usage:
    python -m weekplan.mcp        # starts the MCP server in stdio mode
"""

from weekplan.mcp.server import mcp

if __name__ == "__main__":
    mcp.run()
