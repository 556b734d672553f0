"""
LlamaIndex Provider Integration

This module provides LLM integration via LlamaIndex's provider abstraction.

=============================================================================
ANTHROPIC KWARGS REFERENCE
=============================================================================

When using LLM_PROVIDER="llama_index.llms.anthropic.Anthropic", only the
following kwargs are supported by the Anthropic constructor:

    ALLOWED KWARGS:
    ---------------
    - model (str)           : Model name, e.g., "claude-3-5-sonnet-20241022"
    - api_key (str)         : Anthropic API key (sk-ant-...), per request
    - base_url (str)        : Optional API base URL
    - temperature (float)   : Sampling temperature (0.0-1.0)
    - max_tokens (int)      : Maximum tokens in response
    - timeout (float)       : Seconds before the HTTP call is abandoned
    - max_retries (int)     : SDK-level retries; always 0 here

    FORBIDDEN KWARGS (will cause TypeError):
    -----------------------------------------
    - model_name            : Use 'model' instead
    - token                 : Use 'api_key' instead
    - context_window        : Not supported
    - num_output            : Use 'max_tokens' instead

The resume travels as a DocumentBlock next to the prompt's TextBlock in a
single user ChatMessage; Anthropic receives it as a native PDF document.

=============================================================================
"""

import base64
import logging

from typing import Any, Dict, List, Optional, Sequence
from fastapi.concurrency import run_in_threadpool
from llama_index.core.base.llms.base import BaseLLM
from llama_index.core.base.llms.types import (
    ChatMessage,
    DocumentBlock,
    MessageRole,
    TextBlock,
)

from ..exceptions import ProviderError
from .base import Attachment, Provider
from ...core import settings

logger = logging.getLogger(__name__)

def _get_real_provider(provider_name):
    # The format this method expects is something like:
    # llama_index.llms.anthropic.Anthropic
    if not isinstance(provider_name, str):
        raise ValueError("provider_name must be a string denoting a fully-qualified Python class name")
    dotpos = provider_name.rfind('.')
    if dotpos < 0:
        raise ValueError("provider_name not correctly formatted")
    classname = provider_name[dotpos+1:]
    modname = provider_name[:dotpos]
    from importlib import import_module
    rm = import_module(modname)
    return getattr(rm, classname), modname, classname

class LlamaIndexProvider(Provider):
    def __init__(self,
                 api_key: str,
                 api_base_url: Optional[str] = settings.LLM_BASE_URL,
                 model_name: str = settings.LL_MODEL,
                 provider: str = settings.LLM_PROVIDER,
                 opts: Dict[str, Any] = None):
        if opts is None:
            opts = {}
        self.opts = opts
        self._api_key = api_key
        self._api_base_url = api_base_url
        self._model = model_name
        self._provider = provider
        if not provider:
            raise ValueError("Provider string is required")
        provider_obj, self._modname, self._classname = _get_real_provider(provider)
        if not issubclass(provider_obj, BaseLLM):
            raise TypeError("LLM provider must be e.g. a llama_index.llms.* class - a subclass of llama_index.core.base.llms.base.BaseLLM")

        kwargs_for_provider = {
            'model': model_name,
            'api_key': api_key,
            'max_retries': 0,
        }
        if api_base_url:
            kwargs_for_provider['base_url'] = api_base_url
        for key in ('temperature', 'max_tokens', 'timeout'):
            if opts.get(key) is not None:
                kwargs_for_provider[key] = opts[key]
        try:
            self._client = provider_obj(**kwargs_for_provider)
        except TypeError as e:
            # Fallback for providers that still expect `model_name` instead of `model`.
            if 'model' in str(e) or 'unexpected keyword argument' in str(e):
                legacy_kwargs = {**kwargs_for_provider}
                legacy_kwargs.pop('model', None)
                legacy_kwargs['model_name'] = model_name
                self._client = provider_obj(**legacy_kwargs)
            else:
                raise

    @staticmethod
    def _build_messages(prompt: str, attachments: Sequence[Attachment]) -> List[ChatMessage]:
        blocks = [TextBlock(text=prompt)]
        for attachment in attachments:
            blocks.append(
                DocumentBlock(
                    data=base64.b64encode(attachment.data),
                    document_mimetype=attachment.media_type,
                )
            )
        return [ChatMessage(role=MessageRole.USER, blocks=blocks)]

    def _generate_sync(self, prompt: str, attachments: Sequence[Attachment]) -> str:
        """
        Generate a response from the model.
        """
        messages = self._build_messages(prompt, attachments)
        try:
            response = self._client.chat(messages)
        except Exception as e:
            status_code = getattr(e, "status_code", None)
            logger.error(f"llama_index sync error: status={status_code}, message={e}")
            raise ProviderError(f"llama_index - Error generating response: {e}", status_code=status_code) from e
        return response.message.content or ""

    async def __call__(self, prompt: str, attachments: Sequence[Attachment] = (), **generation_args: Any) -> str:
        if generation_args:
            logger.warning(f"LlamaIndexProvider ignoring generation_args: {generation_args}")
        return await run_in_threadpool(self._generate_sync, prompt, attachments)
