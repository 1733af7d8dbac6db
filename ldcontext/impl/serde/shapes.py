from __future__ import annotations

from typing import Any, Dict, List, Optional

from ldcontext.errors import (EmptyKeyError, EmptyMultiError, InvalidKindError,
                              InvalidTypeError, MalformedMetaError)
from ldcontext.impl.model.attribute_ref import AttributeRef
from ldcontext.impl.serde.fields import (opt_bool, opt_dict, opt_str,
                                         opt_str_list, req_str)

# These classes are the intermediate formats between JSON and the Context type. None of them is
# exposed by the public API.
#
# A single-kind context nested within a multi-kind context (SingleKindNested) has no "kind"
# property of its own, since its kind is the key it appears under. A standalone single-kind context
# (SingleKindStandalone) is the same thing plus a top-level "kind" string.

MULTI_KIND = 'multi'

_NESTED_PROPERTY_NAMES = frozenset(['key', 'name', 'anonymous', '_meta'])


def validate_kind_name(kind: str):
    """
    Applies the kind checks that belong to the wire format itself. Character set restrictions are
    left to the context builder.
    """
    if kind == '':
        raise InvalidKindError('context kind cannot be empty string')
    if kind == 'kind':
        raise InvalidKindError("context kind cannot be 'kind'")


class Meta:
    __slots__ = ['_secondary', '_private_attributes']

    def __init__(self, secondary: Optional[str] = None, private_attributes: Optional[List[str]] = None):
        self._secondary = secondary
        self._private_attributes = private_attributes

    @staticmethod
    def from_dict(data: dict) -> Meta:
        return Meta(opt_str(data, 'secondary'), opt_str_list(data, 'privateAttributes'))

    @property
    def secondary(self) -> Optional[str]:
        return self._secondary

    @property
    def private_attributes(self) -> Optional[List[str]]:
        return self._private_attributes

    @property
    def empty(self) -> bool:
        return self._secondary is None and not self._private_attributes


class SingleKindNested:
    __slots__ = ['_key', '_name', '_anonymous', '_attributes', '_meta']

    def __init__(
        self,
        key: str,
        name: Optional[str] = None,
        anonymous: Optional[bool] = None,
        attributes: Optional[Dict[str, Any]] = None,
        meta: Optional[Meta] = None,
    ):
        self._key = key
        self._name = name
        self._anonymous = anonymous
        self._attributes = {} if attributes is None else attributes
        self._meta = meta

    @staticmethod
    def from_dict(data: dict, kind_in_data: bool = False) -> SingleKindNested:
        """
        Parses the properties of a single-kind context. Every property that is not one of the
        built-in ones is treated as a custom attribute.

        :param data: the JSON object
        :param kind_in_data: True if ``data`` also holds the context's "kind", which should then
          not be treated as an attribute
        """
        key = req_str(data, 'key')
        if key == '':
            raise EmptyKeyError()
        name = opt_str(data, 'name')
        anonymous = opt_bool(data, 'anonymous')
        meta = None
        meta_data = data.get('_meta')
        if meta_data is not None:
            if not isinstance(meta_data, dict):
                raise MalformedMetaError(meta_data)
            meta = Meta.from_dict(meta_data)
        attributes = {}
        for k, v in data.items():
            if k in _NESTED_PROPERTY_NAMES or (kind_in_data and k == 'kind'):
                continue
            attributes[k] = v
        return SingleKindNested(key, name, anonymous, attributes, meta)

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def anonymous(self) -> Optional[bool]:
        return self._anonymous

    @property
    def attributes(self) -> Dict[str, Any]:
        return self._attributes

    @property
    def meta(self) -> Optional[Meta]:
        return self._meta


class SingleKindStandalone:
    __slots__ = ['_kind', '_context']

    def __init__(self, kind: str, context: SingleKindNested):
        self._kind = kind
        self._context = context

    @staticmethod
    def from_dict(data: dict) -> SingleKindStandalone:
        kind = req_str(data, 'kind')
        validate_kind_name(kind)
        return SingleKindStandalone(kind, SingleKindNested.from_dict(data, kind_in_data=True))

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def context(self) -> SingleKindNested:
        return self._context


class MultiKindShape:
    __slots__ = ['_contexts']

    def __init__(self, contexts: Dict[str, SingleKindNested]):
        self._contexts = contexts

    @staticmethod
    def from_dict(data: dict) -> MultiKindShape:
        if data.get('kind') != MULTI_KIND:
            raise InvalidKindError('multi-kind context must have kind "%s"' % MULTI_KIND)
        contexts = {}  # type: Dict[str, SingleKindNested]
        for kind, value in data.items():
            if kind == 'kind':
                continue
            validate_kind_name(kind)
            if not isinstance(value, dict):
                raise InvalidTypeError(kind, 'an object', value)
            contexts[kind] = SingleKindNested.from_dict(value)
        if len(contexts) == 0:
            raise EmptyMultiError()
        return MultiKindShape(contexts)

    @property
    def kind(self) -> str:
        return MULTI_KIND

    @property
    def contexts(self) -> Dict[str, SingleKindNested]:
        return self._contexts


class LegacyUser:
    """
    The user data format used by SDKs that predate contexts. It can be decoded, but it is always
    converted to a single-kind context of kind "user" and is never encoded.
    """

    __slots__ = [
        '_key',
        '_name',
        '_secondary',
        '_anonymous',
        '_custom',
        '_private_attribute_names',
        '_first_name',
        '_last_name',
        '_avatar',
        '_email',
        '_country',
        '_ip',
    ]

    def __init__(
        self,
        key: str,
        name: Optional[str] = None,
        secondary: Optional[str] = None,
        anonymous: Optional[bool] = None,
        custom: Optional[Dict[str, Any]] = None,
        private_attribute_names: Optional[List[AttributeRef]] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        avatar: Optional[str] = None,
        email: Optional[str] = None,
        country: Optional[str] = None,
        ip: Optional[str] = None,
    ):
        self._key = key
        self._name = name
        self._secondary = secondary
        self._anonymous = anonymous
        self._custom = custom
        self._private_attribute_names = private_attribute_names
        self._first_name = first_name
        self._last_name = last_name
        self._avatar = avatar
        self._email = email
        self._country = country
        self._ip = ip

    @staticmethod
    def from_dict(data: dict) -> LegacyUser:
        # Unrecognized properties are ignored; an empty key is allowed.
        private_names = opt_str_list(data, 'privateAttributeNames')
        return LegacyUser(
            key=req_str(data, 'key'),
            name=opt_str(data, 'name'),
            secondary=opt_str(data, 'secondary'),
            anonymous=opt_bool(data, 'anonymous'),
            custom=opt_dict(data, 'custom'),
            private_attribute_names=None if private_names is None else [AttributeRef.from_literal(n) for n in private_names],
            first_name=opt_str(data, 'firstName'),
            last_name=opt_str(data, 'lastName'),
            avatar=opt_str(data, 'avatar'),
            email=opt_str(data, 'email'),
            country=opt_str(data, 'country'),
            ip=opt_str(data, 'ip'),
        )

    @property
    def key(self) -> str:
        return self._key

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def secondary(self) -> Optional[str]:
        return self._secondary

    @property
    def anonymous(self) -> Optional[bool]:
        return self._anonymous

    @property
    def custom(self) -> Optional[Dict[str, Any]]:
        return self._custom

    @property
    def private_attribute_names(self) -> Optional[List[AttributeRef]]:
        return self._private_attribute_names

    @property
    def first_name(self) -> Optional[str]:
        return self._first_name

    @property
    def last_name(self) -> Optional[str]:
        return self._last_name

    @property
    def avatar(self) -> Optional[str]:
        return self._avatar

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def country(self) -> Optional[str]:
        return self._country

    @property
    def ip(self) -> Optional[str]:
        return self._ip
