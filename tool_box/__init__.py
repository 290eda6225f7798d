from .dispatch import dispatch_tool_call, list_tool_descriptors
from .result import ToolResult

__all__ = ["dispatch_tool_call", "list_tool_descriptors", "ToolResult"]
