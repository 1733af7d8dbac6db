from typing import Any, Union

from ldcontext.errors import InvalidKindError, InvalidTypeError
from ldcontext.impl.serde.shapes import (MULTI_KIND, LegacyUser,
                                         MultiKindShape, SingleKindStandalone,
                                         validate_kind_name)

ContextVariant = Union[MultiKindShape, SingleKindStandalone, LegacyUser]
"""One of the three context formats: multi-kind, single-kind, or the legacy user format."""


def parse_variant(data: Any) -> ContextVariant:
    """
    Decides which of the three context formats a parsed JSON value uses, and parses it.

    The formats share all of their properties except "kind", so trying each parser in turn would
    accept bad data: ``{"kind": true, "key": "a"}`` is not a valid single-kind context, but it
    would pass as a legacy user with an unrecognized property. Instead, only the presence and type
    of "kind" decide the format:

    * absent: legacy user format
    * null, or any non-string value: error
    * ``"multi"``: multi-kind context
    * ``""`` or ``"kind"``: error
    * any other string: single-kind context

    :param data: a JSON object, as a dict
    :return: a MultiKindShape, SingleKindStandalone, or LegacyUser
    :raises ldcontext.errors.ContextSerdeError: if the data is not a valid context
    """
    if not isinstance(data, dict):
        raise InvalidTypeError(None, 'an object', data)
    if 'kind' not in data:
        return LegacyUser.from_dict(data)
    kind = data['kind']
    if kind is None:
        raise InvalidKindError('context kind cannot be null')
    if not isinstance(kind, str):
        raise InvalidKindError('context kind must be a string')
    if kind == MULTI_KIND:
        return MultiKindShape.from_dict(data)
    validate_kind_name(kind)
    return SingleKindStandalone.from_dict(data)
