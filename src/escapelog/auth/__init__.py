"""Identity provider factory.

Provides get_identity_provider() / set_identity_provider() to swap adapters.
The default is a TokenIdentityProvider configured from the environment.
"""

from escapelog.auth.port import IdentityProvider
from escapelog.auth.token_adapter import TokenIdentityProvider

_current_provider: IdentityProvider | None = None


def get_identity_provider() -> IdentityProvider:
    """Return the current identity provider, building the default on first use."""
    global _current_provider
    if _current_provider is None:
        _current_provider = TokenIdentityProvider.from_env()
    return _current_provider


def set_identity_provider(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_provider
    _current_provider = provider


def reset_identity_provider() -> None:
    """Reset to the default provider."""
    global _current_provider
    _current_provider = None
