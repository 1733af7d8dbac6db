"""
This submodule implements the evaluation context model that the codec decodes into and encodes
from.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Dict, Optional, Union

_INVALID_KIND_REGEX = re.compile('[^-a-zA-Z0-9._]')


def _validate_kind(kind: str) -> Optional[str]:
    if kind == '':
        return 'context kind must not be empty'
    if kind == 'kind':
        return '"kind" is not a valid context kind'
    if kind == 'multi':
        return 'context of kind "multi" must be created with create_multi or multi_builder'
    if _INVALID_KIND_REGEX.search(kind):
        return 'context kind contains disallowed characters'
    return None


class Context:
    """
    A collection of attributes that can be referenced in flag evaluations. This entity is also
    called an "evaluation context."

    To create a Context of a single kind, such as a user, use :func:`create()` when only the key
    and the kind are relevant, or :func:`builder()` to specify other attributes. To create a
    Context with multiple kinds (a multi-context), use :func:`create_multi()` or
    :func:`multi_builder()`. To read one from JSON, use :func:`from_dict()` or
    :func:`ldcontext.decode()`.

    A Context can be in an error state if it was built with invalid attributes. See :attr:`valid`
    and :attr:`error`.

    A Context is immutable once created.
    """

    DEFAULT_KIND = 'user'
    """A constant for the default context kind of "user"."""

    MULTI_KIND = 'multi'
    """A constant for the kind that all multi-contexts have."""

    def __init__(
        self,
        kind: Optional[str],
        key: str,
        name: Optional[str] = None,
        anonymous: bool = False,
        attributes: Optional[dict] = None,
        private_attributes: Optional[list[str]] = None,
        multi_contexts: Optional[list[Context]] = None,
        allow_empty_key: bool = False,
        error: Optional[str] = None,
        secondary: Optional[str] = None,
    ):
        """
        Constructs an instance, setting all properties. Avoid using this constructor directly;
        use the factory methods or builders, which apply all of the validation rules.
        """
        if error is not None:
            self.__make_invalid(error)
            return
        if multi_contexts is not None:
            if len(multi_contexts) == 0:
                self.__make_invalid('multi-context must contain at least one kind')
                return
            # Sorted by kind so that equality does not depend on the order they were added in.
            multi_contexts = sorted(multi_contexts, key=lambda c: c.kind)
            last_kind = None
            errors = None  # type: Optional[list[str]]
            for c in multi_contexts:
                if c.error is not None:
                    if errors is None:
                        errors = []
                    errors.append(c.error)
                    continue
                if c.kind == last_kind:
                    self.__make_invalid('multi-kind context cannot have same kind more than once')
                    return
                last_kind = c.kind
            if errors:
                self.__make_invalid(', '.join(errors))
                return
            self.__kind = Context.MULTI_KIND
            self.__multi = multi_contexts  # type: Optional[list[Context]]
            self.__key = ''
            self.__name = None
            self.__anonymous = False
            self.__secondary = None
            self.__attributes = None
            self.__private = None
            self.__error = None  # type: Optional[str]
            return
        if kind is None:
            kind = Context.DEFAULT_KIND
        kind_error = _validate_kind(kind)
        if kind_error:
            self.__make_invalid(kind_error)
            return
        if key == '' and not allow_empty_key:
            self.__make_invalid('context key must not be None or empty')
            return
        self.__key = key
        self.__kind = kind
        self.__name = name
        self.__anonymous = anonymous
        self.__secondary = secondary
        self.__attributes = attributes
        self.__private = private_attributes
        self.__multi = None
        self.__error = None

    @classmethod
    def create(cls, key: str, kind: Optional[str] = None) -> Context:
        """
        Creates a single-kind Context with only the key and the kind specified.

        :param key: the context key
        :param kind: the context kind; if omitted, it is :const:`DEFAULT_KIND` ("user")
        :return: a context
        """
        return Context(kind, key)

    @classmethod
    def create_multi(cls, *contexts: Context) -> Context:
        """
        Creates a multi-context out of the specified single-kind Contexts.

        For the returned Context to be valid, the contexts list must not be empty, and all of its
        elements must be valid Contexts with different kinds. If only one context is given, the
        method returns that same context.

        :param contexts: the individual contexts
        :return: a multi-context
        """
        builder = ContextMultiBuilder()
        for c in contexts:
            builder.add(c)
        return builder.build()

    @classmethod
    def from_dict(cls, props: dict) -> Context:
        """
        Creates a Context from properties in a dictionary, corresponding to the JSON
        representation of a context. All three formats are accepted: single-kind, multi-kind,
        and the legacy user format.

        Unlike :func:`ldcontext.decode()`, this method does not raise an exception for invalid
        data; it returns a Context whose :attr:`error` describes the problem.

        :param props: the context properties
        :return: a context
        """
        from ldcontext.codec import decode
        from ldcontext.errors import ContextSerdeError

        if props is None:
            return Context.__create_with_error('Cannot use None as a context')
        try:
            return decode(props)
        except ContextSerdeError as e:
            return Context.__create_with_error(str(e))

    @classmethod
    def builder(cls, key: str) -> ContextBuilder:
        """
        Creates a builder for building a single-kind Context.

        :param key: the context key
        :return: a new builder
        """
        return ContextBuilder(key)

    @classmethod
    def builder_from_context(cls, context: Context) -> ContextBuilder:
        """
        Creates a builder whose properties are the same as an existing single-kind Context.

        :param context: the context to copy from
        :return: a new builder
        """
        return ContextBuilder(context.key, context)

    @classmethod
    def multi_builder(cls) -> ContextMultiBuilder:
        """
        Creates a builder for building a multi-context.

        :return: a new builder
        """
        return ContextMultiBuilder()

    @property
    def valid(self) -> bool:
        """
        True for a valid Context, or False for an invalid one.

        The only ways for a context to be invalid are:

        * The :attr:`kind` property had a disallowed value. See :func:`ldcontext.ContextBuilder.kind()`.
        * For a single context, the :attr:`key` property was empty (this is allowed only for
          contexts decoded from the legacy user format).
        * A multi-context was created without any contexts, with the same kind more than once,
          or with an invalid individual context.

        In any of these cases, :attr:`valid` will be False, and :attr:`error` will return a
        description of the error.
        """
        return self.__error is None

    @property
    def error(self) -> Optional[str]:
        """
        Returns None for a valid Context, or an error message for an invalid one.
        """
        return self.__error

    @property
    def multiple(self) -> bool:
        """
        True if this is a multi-context, in which case :attr:`kind` is :const:`MULTI_KIND`.
        """
        return self.__multi is not None

    @property
    def kind(self) -> str:
        """
        Returns the context's ``kind`` attribute; :const:`MULTI_KIND` for a multi-context.
        """
        return self.__kind

    @property
    def key(self) -> str:
        """
        Returns the context's ``key`` attribute. For a multi-context, this is an empty string.
        """
        return self.__key

    @property
    def name(self) -> Optional[str]:
        """
        Returns the context's ``name`` attribute, or None if it was not set.
        """
        return self.__name

    @property
    def anonymous(self) -> bool:
        """
        Returns True if this context is only intended for flag evaluations and should not be
        indexed. The default value is False.
        """
        return self.__anonymous

    @property
    def secondary(self) -> Optional[str]:
        """
        Returns the context's secondary key, or None if it was not set.

        The secondary key is metadata rather than an attribute: it is carried in the ``_meta``
        object of the JSON representation, and it cannot be referenced with :func:`get()`.
        """
        return self.__secondary

    def get(self, attribute: str) -> Any:
        """
        Looks up the value of any attribute of the context by name.

        The name can be a custom attribute, or one of the built-in ones "kind", "key", "name",
        or "anonymous". For a multi-context, the only supported name is "kind".

        :param attribute: the desired attribute name
        :return: the attribute value, or None if there is no such attribute
        """
        if attribute == 'key':
            return self.__key
        if attribute == 'kind':
            return self.__kind
        if attribute == 'name':
            return self.__name
        if attribute == 'anonymous':
            return self.__anonymous
        if self.__attributes is None:
            return None
        return self.__attributes.get(attribute)

    @property
    def individual_context_count(self) -> int:
        """
        Returns the number of context kinds in this context: 1 for a valid single context, the
        number of kinds for a multi-context, or 0 for an invalid context.
        """
        if self.__error is not None:
            return 0
        if self.__multi is None:
            return 1
        return len(self.__multi)

    def get_individual_context(self, kind: Union[int, str]) -> Optional[Context]:
        """
        Returns the single-kind Context corresponding to one of the kinds in this context.

        ``kind`` can be a zero-based index, or a context kind. For a single-kind context, the only
        matching values are 0 and the context's own :attr:`kind`.

        :param kind: the index or string value of a context kind
        :return: the context corresponding to that index or kind, or None
        """
        if self.__error is not None:
            return None
        if isinstance(kind, str):
            if self.__multi is None:
                return self if kind == self.__kind else None
            for c in self.__multi:
                if c.kind == kind:
                    return c
            return None
        if self.__multi is None:
            return self if kind == 0 else None
        if kind < 0 or kind >= len(self.__multi):
            return None
        return self.__multi[kind]

    @property
    def custom_attributes(self) -> Iterable[str]:
        """
        Gets the names of all non-built-in attributes that have been set in this context.
        """
        return () if self.__attributes is None else self.__attributes

    @property
    def _attributes(self) -> Optional[dict[str, Any]]:
        # for internal use by ContextBuilder and the codec; the dict must not be modified
        return self.__attributes

    @property
    def private_attributes(self) -> Iterable[str]:
        """
        Gets the list of all attribute references marked as private for this specific Context,
        in the order they were added.
        """
        return () if self.__private is None else self.__private

    @property
    def _private_attributes(self) -> Optional[list[str]]:
        # for internal use by ContextBuilder and the codec; the list must not be modified
        return self.__private

    def to_dict(self) -> dict[str, Any]:
        """
        Returns a dictionary of properties corresponding to the JSON representation of the
        context, in the single-kind or multi-kind format. An invalid context returns an empty
        dictionary.

        :return: a dictionary corresponding to the JSON representation
        """
        if not self.valid:
            return {}
        from ldcontext.codec import encode

        return encode(self)

    def to_json_string(self) -> str:
        """
        Returns the JSON representation of the context as a string. This is equivalent to
        calling :func:`to_dict()` and then ``json.dumps()`` with compact separators.

        :return: the JSON representation as a string
        """
        from ldcontext.codec import encode_json

        if not self.valid:
            return '{}'
        return encode_json(self)

    def __getitem__(self, attribute) -> Any:
        return self.get(attribute) if isinstance(attribute, str) else None

    def __repr__(self) -> str:
        """
        Returns the JSON representation for a valid Context, or a description of the error for an
        invalid one. Application code should not rely on this always being the JSON representation.
        """
        if not self.valid:
            return "[invalid context: %s]" % self.__error
        return self.to_json_string()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Context):
            return False
        if (
            self.__kind != other.__kind
            or self.__key != other.__key
            or self.__name != other.__name
            or self.__anonymous != other.__anonymous
            or self.__secondary != other.__secondary
            or self.__attributes != other.__attributes
            or self.__private != other.__private
            or self.__error != other.__error
        ):
            return False
        if self.__multi is None:
            return True  # the other context isn't a multi-context either, since the kinds matched
        if other.__multi is None or len(other.__multi) != len(self.__multi):
            return False
        for i in range(len(self.__multi)):
            if other.__multi[i] != self.__multi[i]:
                return False
        return True

    def __ne__(self, other) -> bool:
        return not self.__eq__(other)

    def __make_invalid(self, error: str):
        self.__error = error
        self.__kind = ''
        self.__key = ''
        self.__name = None
        self.__anonymous = False
        self.__secondary = None
        self.__attributes = None
        self.__private = None
        self.__multi = None

    @classmethod
    def __create_with_error(cls, error: str) -> Context:
        return Context('', '', error=error)


class ContextBuilder:
    """
    A mutable object that uses the builder pattern to specify properties for :class:`ldcontext.Context`.

    Obtain an instance by calling :func:`ldcontext.Context.builder()`, call setter methods such as
    :func:`name()` or :func:`set()`, then call :func:`build()`. Setters return the same builder,
    so calls can be chained:
    ::

        context = Context.builder('user-key') \
            .name('my-name') \
            .set('country', 'us') \
            .build()

    :param key: the context key
    """

    def __init__(self, key: str, copy_from: Optional[Context] = None):
        self.__key = key
        if copy_from is None:
            self.__kind = Context.DEFAULT_KIND
            self.__name = None  # type: Optional[str]
            self.__anonymous = False
            self.__secondary = None  # type: Optional[str]
            self.__attributes = None  # type: Optional[Dict[str, Any]]
            self.__private = None  # type: Optional[list[str]]
            self.__copy_on_write_attrs = False
            self.__copy_on_write_private = False
        else:
            self.__kind = copy_from.kind
            self.__name = copy_from.name
            self.__anonymous = copy_from.anonymous
            self.__secondary = copy_from.secondary
            self.__attributes = copy_from._attributes
            self.__private = copy_from._private_attributes
            self.__copy_on_write_attrs = self.__attributes is not None
            self.__copy_on_write_private = self.__private is not None
        self.__allow_empty_key = False

    def build(self) -> Context:
        """
        Creates a Context from the current builder properties.

        The builder never raises an exception for invalid properties such as an empty key; it
        returns a Context whose :attr:`ldcontext.Context.error` describes the problem.

        :return: a new :class:`ldcontext.Context`
        """
        self.__copy_on_write_attrs = self.__attributes is not None
        self.__copy_on_write_private = self.__private is not None
        return Context(
            self.__kind,
            self.__key,
            self.__name,
            self.__anonymous,
            self.__attributes,
            self.__private,
            None,
            self.__allow_empty_key,
            secondary=self.__secondary,
        )

    def key(self, key: str) -> ContextBuilder:
        """
        Sets the context's key attribute. It cannot be an empty string.

        :param key: the context key
        :return: the builder
        """
        self.__key = key
        return self

    def kind(self, kind: str) -> ContextBuilder:
        """
        Sets the context's kind attribute. This value is case-sensitive.

        * It may only contain letters, numbers, and the characters ``.``, ``_``, and ``-``.
        * It cannot equal the literal string "kind".
        * For a single context, it cannot equal "multi".

        :param kind: the context kind
        :return: the builder
        """
        self.__kind = kind
        return self

    def name(self, name: Optional[str]) -> ContextBuilder:
        """
        Sets the context's name attribute.

        :param name: the context name (None to unset the attribute)
        :return: the builder
        """
        self.__name = name
        return self

    def anonymous(self, anonymous: bool) -> ContextBuilder:
        """
        Sets whether the context is only intended for flag evaluations and should not be indexed.

        :param anonymous: true if the context should be excluded from indexing
        :return: the builder
        """
        self.__anonymous = anonymous
        return self

    def secondary(self, secondary: Optional[str]) -> ContextBuilder:
        """
        Sets the context's secondary key, which is carried as metadata in ``_meta.secondary``.

        :param secondary: the secondary key (None to unset it)
        :return: the builder
        """
        self.__secondary = secondary
        return self

    def set(self, attribute: str, value: Any) -> ContextBuilder:
        """
        Sets the value of any attribute for the context.

        The allowable types are equivalent to JSON types: boolean, number, string, array (list),
        or object (dictionary). The built-in attribute names have restrictions, and a value of an
        unsupported type for them is ignored:

        * ``"kind"``, ``"key"``: Must be a string. See :func:`kind()` and :func:`key()`.
        * ``"name"``: Must be a string or None. See :func:`name()`.
        * ``"anonymous"``: Must be a boolean. See :func:`anonymous()`.

        The attribute name ``"_meta"`` is not allowed, because it has special meaning in the
        JSON representation; setting it has no effect.

        A value of None removes the attribute.

        :param attribute: the attribute name to set
        :param value: the value to set
        :return: the builder
        """
        self.try_set(attribute, value)
        return self

    def try_set(self, attribute: str, value: Any) -> bool:
        """
        Same as :func:`set()`, but returns a boolean indicating whether the attribute was
        successfully set.

        :param attribute: the attribute name to set
        :param value: the value to set
        :return: True if successful; False if the name was invalid or the value was not an
          allowed type for that attribute
        """
        if attribute == '' or attribute == '_meta':
            return False
        if attribute == 'key':
            if isinstance(value, str):
                self.__key = value
                return True
            return False
        if attribute == 'kind':
            if isinstance(value, str):
                self.__kind = value
                return True
            return False
        if attribute == 'name':
            if value is None or isinstance(value, str):
                self.__name = value
                return True
            return False
        if attribute == 'anonymous':
            if isinstance(value, bool):
                self.__anonymous = value
                return True
            return False
        if self.__copy_on_write_attrs:
            self.__copy_on_write_attrs = False
            self.__attributes = self.__attributes and self.__attributes.copy()
        if self.__attributes is None:
            self.__attributes = {}
        if value is None:
            self.__attributes.pop(attribute, None)
        else:
            self.__attributes[attribute] = value
        return True

    def private(self, *attributes: str) -> ContextBuilder:
        """
        Designates any number of Context attributes, or properties within them, as private.

        Each parameter can be either a simple attribute name, or a slash-delimited path referring to
        a JSON object property within an attribute.

        :param attributes: attribute names or references to mark as private
        :return: the builder
        """
        if len(attributes) != 0:
            if self.__copy_on_write_private:
                self.__copy_on_write_private = False
                self.__private = self.__private and self.__private.copy()
            if self.__private is None:
                self.__private = []
            self.__private.extend(attributes)
        return self

    def _allow_empty_key(self, allow: bool):
        # Used by the codec for contexts decoded from the legacy user format, where an empty key
        # was allowed.
        self.__allow_empty_key = allow


class ContextMultiBuilder:
    """
    A mutable object that uses the builder pattern to specify properties for a multi-context.

    Obtain an instance by calling :func:`ldcontext.Context.multi_builder()`, then call
    :func:`add()` for each individual context:
    ::

        context = Context.multi_builder() \
            .add(Context.create("my-user-key")) \
            .add(Context.create("my-org-key", "organization")) \
            .build()
    """

    def __init__(self):
        self.__contexts = []  # type: list[Context]
        self.__copy_on_write = False

    def build(self) -> Context:
        """
        Creates a Context from the current builder properties.

        If only one context was added to the builder, this method returns that context rather
        than a multi-context. Invalid states are reported through :attr:`ldcontext.Context.error`
        rather than by raising an exception.

        :return: a new Context
        """
        if len(self.__contexts) == 1:
            return self.__contexts[0]  # multi-context with only one context is the same as just that context
        self.__copy_on_write = True
        return Context(None, '', multi_contexts=self.__contexts)

    def add(self, context: Context) -> ContextMultiBuilder:
        """
        Adds an individual Context for a specific kind to the builder.

        Adding more than one Context for the same kind, or an invalid Context, is detected when
        :func:`build()` is called. If ``context`` is itself a multi-context, each of its individual
        contexts is added separately.

        :param context: the context to add
        :return: the builder
        """
        if context.multiple:
            for i in range(context.individual_context_count):
                c = context.get_individual_context(i)
                if c is not None:
                    self.add(c)
        else:
            if self.__copy_on_write:
                self.__copy_on_write = False
                self.__contexts = self.__contexts.copy()
            self.__contexts.append(context)
        return self


__all__ = ['Context', 'ContextBuilder', 'ContextMultiBuilder']
