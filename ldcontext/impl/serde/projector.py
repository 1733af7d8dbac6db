from typing import Dict, Union

from ldcontext.context import Context
from ldcontext.errors import IllegalSerializeError, InvalidContextError
from ldcontext.impl.serde.shapes import (Meta, MultiKindShape,
                                         SingleKindNested,
                                         SingleKindStandalone)


def variant_from_context(context: Context) -> Union[MultiKindShape, SingleKindStandalone]:
    """
    Converts a Context to the intermediate format it should be encoded in. This is never the
    legacy user format, even if that is how the context was originally decoded.

    :raises ldcontext.errors.InvalidContextError: if the context is in an error state
    """
    if not context.valid:
        raise InvalidContextError(context.error)
    if context.multiple:
        contexts = {}  # type: Dict[str, SingleKindNested]
        for i in range(context.individual_context_count):
            c = context.get_individual_context(i)
            if c is not None:
                contexts[c.kind] = _nested_from_context(c)
        if len(contexts) == 0:
            raise IllegalSerializeError('multi-kind context must contain at least one nested context')
        return MultiKindShape(contexts)
    return SingleKindStandalone(context.kind, _nested_from_context(context))


def _nested_from_context(c: Context) -> SingleKindNested:
    private = c._private_attributes
    return SingleKindNested(
        key=c.key,
        name=c.name,
        anonymous=c.anonymous,
        attributes=dict(c._attributes or {}),
        meta=Meta(c.secondary, None if private is None else list(private)),
    )
