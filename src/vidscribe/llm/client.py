"""Unified LLM client via LiteLLM."""

from __future__ import annotations

from vidscribe.core.config import LLMConfig


def complete(
    messages: list[dict[str, str]],
    config: LLMConfig,
    **kwargs: object,
) -> str:
    """Send a chat completion request via LiteLLM.

    Args:
        messages: Chat messages in OpenAI format.
        config: LLM configuration.
        **kwargs: Additional kwargs passed to litellm.completion.

    Returns:
        The assistant's response text.
    """
    from litellm import completion

    call_kwargs: dict = {
        "model": config.model,
        "messages": messages,
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    if config.api_base:
        call_kwargs["api_base"] = config.api_base
    call_kwargs.update(kwargs)

    response = completion(**call_kwargs)
    return response.choices[0].message.content or ""
