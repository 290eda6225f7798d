from typing import Any, Dict, List


def _source_line(index: int, source: Any) -> str:
    metadata = source.get("metadata") if isinstance(source, dict) else None
    if isinstance(metadata, dict) and metadata.get("title") and metadata.get("url"):
        return f"[{index}] {metadata['title']} - {metadata['url']}\n"
    # Sources lacking both metadata and pageContent render an empty entry
    page_content = source.get("pageContent") if isinstance(source, dict) else None
    return f"[{index}] {'' if page_content is None else page_content}\n"


def format_answer(data: Dict[str, Any]) -> str:
    """Return the backend message with a numbered citation list appended."""
    message = data.get("message")
    text = "" if message is None else str(message)

    sources: List[Any] = data.get("sources") if isinstance(data.get("sources"), list) else []
    if not sources:
        return text

    text += "\n\nCitations:\n"
    for index, source in enumerate(sources, start=1):
        text += _source_line(index, source)
    return text
