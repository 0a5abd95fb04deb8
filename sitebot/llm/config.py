"""LLM provider configuration using LangChain abstractions."""

from langchain_core.language_models.chat_models import BaseChatModel

from config.settings import get_settings


def get_llm(
    temperature: float | None = None,
    max_tokens: int | None = None,
) -> BaseChatModel:
    """Create and return the configured completion model.

    Uses LangChain's BaseChatModel abstraction for LLM-agnostic access.
    Default: Anthropic Claude via langchain-anthropic. Every client carries
    an explicit timeout and performs no retries.
    """
    settings = get_settings()
    provider = settings.sitebot_llm_provider.lower()
    temperature = settings.sitebot_llm_temperature if temperature is None else temperature
    max_tokens = max_tokens or settings.sitebot_llm_max_tokens

    if provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=settings.sitebot_llm_model,
            temperature=temperature,
            max_tokens=max_tokens,
            timeout=settings.sitebot_llm_timeout,
            max_retries=0,
            api_key=settings.anthropic_api_key,
        )
    elif provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        return ChatGoogleGenerativeAI(
            model=settings.sitebot_llm_model,
            temperature=temperature,
            max_output_tokens=max_tokens,
            timeout=settings.sitebot_llm_timeout,
            max_retries=0,
            google_api_key=settings.google_api_key,
        )
    else:
        raise ValueError(
            f"Unsupported LLM provider: {provider}. "
            "Supported: 'anthropic', 'google'"
        )
