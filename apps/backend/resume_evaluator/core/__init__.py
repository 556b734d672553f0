from .config import settings, setup_logging, Settings, LLMConfig

__all__ = ["settings", "setup_logging", "Settings", "LLMConfig"]
