"""Session/identity collaborator.

The ordering core only needs to know who is signed in when an order is
drafted; authentication itself lives elsewhere.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Shopper:
    """The signed-in user as seen by checkout."""

    uid: str
    email: str | None = None
    display_name: str | None = None


class SessionPort(ABC):
    """Abstract session interface."""

    @property
    @abstractmethod
    def current_user(self) -> Shopper | None:
        """The signed-in shopper, or None for a guest."""
        ...

    @abstractmethod
    def logout(self) -> None:
        """End the current session."""
        ...


class StaticSession(SessionPort):
    """In-process session holding a fixed shopper until logout."""

    def __init__(self, user: Shopper | None = None) -> None:
        self._user = user

    @property
    def current_user(self) -> Shopper | None:
        return self._user

    def login(self, user: Shopper) -> None:
        self._user = user

    def logout(self) -> None:
        self._user = None
