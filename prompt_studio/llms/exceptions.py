class LLMException(Exception):
    """Base exception for llms application."""


class MissingLLMApiKeyException(LLMException):
    """Raised when no API key is configured for the provider of the requested model."""


class UnsupportedLLMProviderException(LLMException):
    """Raised when a model maps to a provider we cannot build a client for."""
