"""The ``affine`` LLM tool, its action table and request dialects.

AffineTool lives in ``affine_kb.tools.affine_tool``; it is not re-exported
here because the presenter reads the action table from this package.
"""

from affine_kb.tools.actions import ACTIONS, ActionArguments, ActionSpec, validate_arguments
from affine_kb.tools.dialects import GraphQLDialect, McpDialect, OperationRequest, dialect_for


__all__ = [
    "ACTIONS",
    "ActionArguments",
    "ActionSpec",
    "GraphQLDialect",
    "McpDialect",
    "OperationRequest",
    "dialect_for",
    "validate_arguments",
]
