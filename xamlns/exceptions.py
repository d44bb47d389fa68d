class XamlNamespaceError(Exception):
    """Base class for errors raised by xamlns."""


class NamespaceRegistrationError(XamlNamespaceError):
    """
    Raised when a (prefix, uri) pair cannot be bound in a NamespaceRegistry.
    """

    def __init__(self, prefix, uri, reason: str):
        self.prefix = prefix
        self.uri = uri
        self.reason = reason
        super().__init__(f"Cannot register prefix '{prefix}' for '{uri}': {reason}")
