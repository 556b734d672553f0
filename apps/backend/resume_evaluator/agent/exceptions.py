from typing import Optional


class ProviderError(RuntimeError):
    """Raised when the underlying LLM provider fails"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
