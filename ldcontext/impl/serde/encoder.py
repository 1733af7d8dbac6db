import json
from typing import Any, Dict

from ldcontext.errors import IllegalSerializeError
from ldcontext.impl.serde.shapes import (LegacyUser, Meta, MultiKindShape,
                                         SingleKindNested,
                                         SingleKindStandalone)


def variant_to_dict(variant) -> Dict[str, Any]:
    """
    Produces the JSON representation of an intermediate context format, as a dict. Default values
    are omitted: an absent name, an anonymous value of false, and an empty ``_meta``.

    :raises ldcontext.errors.IllegalSerializeError: if asked to serialize the legacy user format
    """
    if isinstance(variant, MultiKindShape):
        ret = {'kind': variant.kind}  # type: Dict[str, Any]
        for kind, nested in variant.contexts.items():
            ret[kind] = _nested_to_dict(nested)
        return ret
    if isinstance(variant, SingleKindStandalone):
        ret = {'kind': variant.kind}
        ret.update(_nested_to_dict(variant.context))
        return ret
    if isinstance(variant, LegacyUser):
        raise IllegalSerializeError('cannot serialize a context in the legacy user format')
    raise IllegalSerializeError('not a context variant: %r' % (variant,))


def _nested_to_dict(nested: SingleKindNested) -> Dict[str, Any]:
    ret = {'key': nested.key}  # type: Dict[str, Any]
    if nested.name is not None:
        ret['name'] = nested.name
    if nested.anonymous:
        ret['anonymous'] = True
    for k, v in nested.attributes.items():
        ret[k] = v
    if nested.meta is not None and not nested.meta.empty:
        ret['_meta'] = _meta_to_dict(nested.meta)
    return ret


def _meta_to_dict(meta: Meta) -> Dict[str, Any]:
    ret = {}  # type: Dict[str, Any]
    if meta.secondary is not None:
        ret['secondary'] = meta.secondary
    if meta.private_attributes:
        ret['privateAttributes'] = list(meta.private_attributes)
    return ret


class ContextVariantEncoder(json.JSONEncoder):
    """
    A JSON encoder that knows how to serialize the intermediate context formats, using the same
    rules as :func:`variant_to_dict()`.
    """

    def __init__(self, compact: bool = True):
        super().__init__(separators=(',', ':') if compact else None)

    def default(self, obj):
        if isinstance(obj, (MultiKindShape, SingleKindStandalone, LegacyUser)):
            return variant_to_dict(obj)
        return json.JSONEncoder.default(self, obj)
