from .manager import AgentManager
from .exceptions import ProviderError
from .providers.base import Attachment

__all__ = ["AgentManager", "ProviderError", "Attachment"]
