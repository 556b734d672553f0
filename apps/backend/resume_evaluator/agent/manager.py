import asyncio
import logging

from typing import Any, Sequence

from ..core import LLMConfig
from .exceptions import ProviderError
from .providers.base import Attachment, Provider

logger = logging.getLogger(__name__)


class AgentManager:
    def __init__(self, config: LLMConfig) -> None:
        self.config = config

    async def _get_provider(self, **kwargs: Any) -> Provider:
        # Default options for any LLM. Not all can handle them
        # but each provider can make best effort.
        opts = {
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "timeout": self.config.timeout_seconds,
        }
        opts.update(kwargs)
        from .providers.llama_index import LlamaIndexProvider
        return LlamaIndexProvider(api_key=self.config.api_key,
                                  api_base_url=self.config.base_url,
                                  model_name=self.config.model,
                                  provider=self.config.provider,
                                  opts=opts)

    async def run(self, prompt: str, attachments: Sequence[Attachment] = (), **kwargs: Any) -> str:
        """
        Run the provider once with the given prompt and attachments.

        The call is bounded by ``config.timeout_seconds``; there is no retry.
        """
        provider = await self._get_provider(**kwargs)
        try:
            return await asyncio.wait_for(
                provider(prompt, attachments),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(f"LLM call exceeded {self.config.timeout_seconds}s")
            raise ProviderError(
                f"Upstream request timed out after {self.config.timeout_seconds:g} seconds"
            ) from e
