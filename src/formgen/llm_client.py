"""LLM client factory for form generation.

Supports OpenAI and Anthropic chat models with runtime model selection.
"""

from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel

from common.config.env import get_env_str

DEFAULT_PROVIDER = "openai"

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-20241022",
}

_PLACEHOLDER_KEYS = {"<REPLACE_ME>", "changeme", "your_api_key_here"}


def get_llm_client(
    provider: Optional[str] = None,
    model: Optional[str] = None,
    temperature: float = 0.7,
) -> BaseChatModel:
    """Get a chat model for the specified provider.

    Args:
        provider: LLM provider ('openai', 'anthropic').
                  Defaults to LLM_PROVIDER env var or 'openai'.
        model: Model name. Defaults to LLM_MODEL env var or the provider default.
        temperature: Sampling temperature.

    Returns:
        BaseChatModel: LangChain chat model instance.

    Raises:
        ValueError: If the provider is unsupported or the OpenAI key is a placeholder.
    """
    resolved_provider = (provider or get_env_str("LLM_PROVIDER", DEFAULT_PROVIDER)).lower()
    if resolved_provider not in DEFAULT_MODELS:
        raise ValueError(
            f"Unsupported provider: {resolved_provider}. "
            f"Supported: {list(DEFAULT_MODELS.keys())}"
        )

    resolved_model = model or get_env_str("LLM_MODEL", DEFAULT_MODELS[resolved_provider])

    if resolved_provider == "openai":
        from langchain_openai import ChatOpenAI

        key = get_env_str("OPENAI_API_KEY")
        if not key or key.strip() in _PLACEHOLDER_KEYS or key.startswith("<"):
            raise ValueError(
                "OPENAI_API_KEY is missing or set to a placeholder value. "
                "Please update your .env file with a valid OpenAI API key."
            )
        return ChatOpenAI(
            model=resolved_model,
            temperature=temperature,
            model_kwargs={"response_format": {"type": "json_object"}},
        )

    from langchain_anthropic import ChatAnthropic

    return ChatAnthropic(model=resolved_model, temperature=temperature)
