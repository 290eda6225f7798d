from dataclasses import dataclass

from mcp import types


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of one tool call: either answer text or a flagged error text."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=False)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )
