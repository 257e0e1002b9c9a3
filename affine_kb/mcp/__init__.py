"""MCP server surface for the ``affine`` tool."""
