"""Errors shared by the catalogue and ordering contexts.

Input problems use Protean's ``ValidationError``; the classes here cover
collaborator failures and internal bookkeeping.
"""


class StorefrontError(Exception):
    """Base class for storefront core errors."""


class ConfigurationError(StorefrontError):
    """An environment setting is missing or malformed."""


class CollaboratorError(StorefrontError):
    """A catalog, order-storage or cart-store call failed.

    The failure is recoverable: callers may re-invoke the same operation.
    """

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(f"{collaborator}: {message}")
        self.collaborator = collaborator
        self.message = message


class StaleResultError(StorefrontError):
    """A catalog page arrived for a filter/sort spec that has since changed."""

    def __init__(self, issued_version: int, current_version: int) -> None:
        super().__init__(f"Result for spec version {issued_version} arrived after version {current_version}")
        self.issued_version = issued_version
        self.current_version = current_version
