"""Bearer-token identity provider.

Tokens are configured up front, either directly or through the
``ESCAPELOG_AUTH_TOKENS`` environment variable, formatted as
``token=user_id[:display name]`` pairs separated by commas::

    ESCAPELOG_AUTH_TOKENS="s3cret=owner:Escape Owner"
"""

import os

from escapelog.auth.port import Identity, IdentityProvider, SignInResult

TOKENS_ENV_VAR = "ESCAPELOG_AUTH_TOKENS"


def parse_tokens(raw: str) -> dict[str, Identity]:
    tokens = {}
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        token, sep, owner = entry.partition("=")
        if not sep or not token.strip() or not owner.strip():
            raise ValueError(f"Malformed token entry in {TOKENS_ENV_VAR}: {entry!r}")
        user_id, _, display_name = owner.partition(":")
        tokens[token.strip()] = Identity(user_id=user_id.strip(), display_name=display_name.strip() or None)
    return tokens


class TokenIdentityProvider(IdentityProvider):
    """Maps opaque bearer tokens to identities."""

    def __init__(self, tokens: dict[str, Identity] | None = None) -> None:
        self.tokens: dict[str, Identity] = dict(tokens or {})

    @classmethod
    def from_env(cls) -> "TokenIdentityProvider":
        return cls(parse_tokens(os.getenv(TOKENS_ENV_VAR, "")))

    def current_user(self, credential: str | None) -> Identity | None:
        if not credential:
            return None
        return self.tokens.get(credential)

    def sign_in(self, credential: str) -> SignInResult:
        identity = self.current_user(credential)
        if identity is None:
            return SignInResult(success=False, failure_reason="Unknown credential")
        return SignInResult(success=True, identity=identity)
