from .base import Attachment, Provider

__all__ = ["Attachment", "Provider"]
