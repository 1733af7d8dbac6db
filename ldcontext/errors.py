"""
This submodule contains the exceptions raised when a context cannot be decoded from, or encoded
to, its JSON representation.
"""

from typing import Optional


class ContextSerdeError(ValueError):
    """
    Base class for all errors caused by context data that cannot be converted to or from JSON.

    It is a subclass of ``ValueError``, so callers that only care about "bad input" can catch that.
    """

    def __init__(self, message: str, property_name: Optional[str] = None):
        super(ContextSerdeError, self).__init__(message)
        self._property_name = property_name

    @property
    def property_name(self) -> Optional[str]:
        """
        The name of the JSON property that caused the error, or None if the error is not
        specific to a property.
        """
        return self._property_name


class InvalidKindError(ContextSerdeError):
    """
    The ``kind`` property was present but was null, was not a string, was an empty string, or
    was the reserved value ``"kind"``.
    """

    def __init__(self, message: str):
        super(InvalidKindError, self).__init__(message, 'kind')


class MissingFieldError(ContextSerdeError):
    """A required property, such as ``key``, was absent."""

    def __init__(self, property_name: str):
        super(MissingFieldError, self).__init__('required property "%s" is missing' % property_name, property_name)


class InvalidTypeError(ContextSerdeError):
    """A property, or the document itself, had the wrong JSON type."""

    def __init__(self, property_name: Optional[str], expected: str, value):
        what = 'context' if property_name is None else 'property "%s"' % property_name
        super(InvalidTypeError, self).__init__('%s should be %s but was %s' % (what, expected, _json_type_name(value)), property_name)


class MalformedMetaError(InvalidTypeError):
    """The ``_meta`` property was present but was not a JSON object."""

    def __init__(self, value):
        super(MalformedMetaError, self).__init__('_meta', 'an object', value)


class EmptyMultiError(ContextSerdeError):
    """A multi-kind context did not contain any individual contexts."""

    def __init__(self):
        super(EmptyMultiError, self).__init__('multi-kind context must contain at least one nested context')


class EmptyKeyError(ContextSerdeError):
    """A single-kind or multi-kind context had an empty ``key``; only the legacy user format allows that."""

    def __init__(self):
        super(EmptyKeyError, self).__init__('context key must not be empty', 'key')


class BuilderError(ContextSerdeError):
    """
    The context builder rejected the decoded properties (for instance, a kind containing
    disallowed characters). The message is the builder's own error description.
    """

    def __init__(self, message: str):
        super(BuilderError, self).__init__(message)


class InvalidContextError(ContextSerdeError):
    """An attempt was made to encode a context that is in an error state."""

    def __init__(self, context_error: Optional[str]):
        super(InvalidContextError, self).__init__('cannot serialize an invalid context: %s' % context_error)


class IllegalSerializeError(RuntimeError):
    """
    Raised when the serializer is asked to emit a shape it must never produce, such as the legacy
    user format. This always indicates a programming error rather than bad input.
    """


def _json_type_name(value) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, list):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return value.__class__.__name__


__all__ = [
    'ContextSerdeError',
    'InvalidKindError',
    'MissingFieldError',
    'InvalidTypeError',
    'MalformedMetaError',
    'EmptyMultiError',
    'EmptyKeyError',
    'BuilderError',
    'InvalidContextError',
    'IllegalSerializeError',
]
