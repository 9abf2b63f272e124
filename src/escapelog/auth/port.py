"""Identity provider port (abstract interface).

The log has a single author. Reads are public; writes need a signed-in
identity. Adapters decide what a credential is and whom it belongs to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The signed-in user."""

    user_id: str
    display_name: str | None = None


@dataclass(frozen=True)
class SignInResult:
    """Outcome of a sign-in attempt."""

    success: bool
    identity: Identity | None = None
    failure_reason: str | None = None


class IdentityProvider(ABC):
    """Abstract identity provider interface."""

    @abstractmethod
    def current_user(self, credential: str | None) -> Identity | None:
        """Return the identity behind ``credential``, or None when not signed in."""
        ...

    @abstractmethod
    def sign_in(self, credential: str) -> SignInResult:
        """Attempt to sign in with ``credential``."""
        ...
