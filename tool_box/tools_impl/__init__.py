from .perplexica_ask import perplexica_ask_tool

TOOLS = {
    perplexica_ask_tool["name"]: perplexica_ask_tool,
}

__all__ = ["TOOLS"]
