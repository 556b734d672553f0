from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class Attachment:
    """Binary content sent next to the prompt, e.g. a PDF resume."""

    data: bytes
    media_type: str


class Provider(ABC):
    """
    Abstract base class for text generation providers.
    """

    @abstractmethod
    async def __call__(
        self,
        prompt: str,
        attachments: Sequence[Attachment] = (),
        **generation_args: Any,
    ) -> str: ...
