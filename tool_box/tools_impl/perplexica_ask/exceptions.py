from typing import Any, Dict, Optional


class PerplexicaError(Exception):
    """Unified Perplexica Ask error type"""

    code = "perplexica_error"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.code
        self.provider = "perplexica"
        self.meta = meta or {}
        super().__init__(message)


class InvalidInputError(PerplexicaError):
    """Tool arguments or messages are missing or malformed"""

    code = "invalid_input"


class NetworkError(PerplexicaError):
    """The backend could not be reached"""

    code = "network_error"


class UpstreamError(PerplexicaError):
    """The backend answered with a non-success status"""

    code = "http_error"


class MalformedResponseError(PerplexicaError):
    """The backend answered with a body that is not a JSON object"""

    code = "invalid_response"
