"""
Custom exceptions used by the remote collections runtime.

Keeping library-specific errors in one module gives users a predictable
import surface for catching and handling operational edge cases.
"""


class RemoteCollectionsError(Exception):
    """Base error type for all library-level exceptions."""


class StoreUnavailableError(RemoteCollectionsError):
    """
    Raised when the backing store cannot be reached or drops mid-call.

    The collection layer never retries. Reconnect and retry policy belongs to
    the store client configured by the application.
    """


class SerializationError(RemoteCollectionsError):
    """
    Raised when an element cannot be serialized or a payload decoded.

    This typically indicates an unsupported element type, or bytes written to
    the key by a different serializer.
    """


class BackendConfigurationError(RemoteCollectionsError):
    """Raised when a store backend name or its options are invalid."""


class WrongKeyTypeError(RemoteCollectionsError):
    """
    Raised when a key already holds a different kind of collection.

    For example, using a key created by a sorted set as an unordered set.
    """
