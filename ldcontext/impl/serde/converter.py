import logging

from ldcontext.context import Context, ContextBuilder, ContextMultiBuilder
from ldcontext.errors import BuilderError
from ldcontext.impl.serde.shapes import (LegacyUser, MultiKindShape,
                                         SingleKindNested,
                                         SingleKindStandalone)
from ldcontext.impl.serde.variant import ContextVariant
from ldcontext.impl.util import is_reserved_attribute_name, log

# Legacy user properties that become string attributes of the "user" context. Only firstName and
# lastName differ between the legacy and the modern naming.
_LEGACY_STRING_ATTRIBUTES = (
    ('avatar', 'avatar'),
    ('first_name', 'firstName'),
    ('last_name', 'lastName'),
    ('country', 'country'),
    ('email', 'email'),
    ('ip', 'ip'),
)


def context_from_variant(variant: ContextVariant, logger: logging.Logger = log) -> Context:
    """
    Builds a Context from one of the intermediate formats.

    :raises ldcontext.errors.BuilderError: if the context builder rejects the properties
    """
    if isinstance(variant, MultiKindShape):
        multi_builder = ContextMultiBuilder()
        for kind, nested in variant.contexts.items():
            b = ContextBuilder(nested.key)
            _apply_nested(b, nested)
            multi_builder.add(_checked(b.kind(kind).build()))
        return _checked(multi_builder.build())
    if isinstance(variant, SingleKindStandalone):
        b = ContextBuilder(variant.context.key)
        _apply_nested(b, variant.context)
        return _checked(b.kind(variant.kind).build())
    if isinstance(variant, LegacyUser):
        logger.debug('Converting context in legacy user format to a single-kind context of kind "%s"', Context.DEFAULT_KIND)
        b = ContextBuilder(variant.key)
        b._allow_empty_key(True)
        _apply_legacy_user(b, variant, logger)
        return _checked(b.build())
    raise TypeError('not a context variant: %r' % (variant,))


def _checked(context: Context) -> Context:
    if not context.valid:
        raise BuilderError(context.error or 'invalid context')
    return context


def _apply_nested(b: ContextBuilder, nested: SingleKindNested):
    for name, value in nested.attributes.items():
        b.set(name, value)
    if nested.anonymous is not None:
        b.anonymous(nested.anonymous)
    if nested.name is not None:
        b.name(nested.name)
    meta = nested.meta
    if meta is not None:
        if meta.secondary is not None:
            b.secondary(meta.secondary)
        if meta.private_attributes is not None:
            for attr in meta.private_attributes:
                b.private(attr)


def _apply_legacy_user(b: ContextBuilder, user: LegacyUser, logger: logging.Logger):
    if user.anonymous is not None:
        b.anonymous(user.anonymous)
    if user.secondary is not None:
        b.secondary(user.secondary)
    if user.name is not None:
        b.name(user.name)
    for prop, attr in _LEGACY_STRING_ATTRIBUTES:
        value = getattr(user, prop)
        if value is not None:
            b.set(attr, value)
    if user.custom is not None:
        for name, value in user.custom.items():
            # a custom attribute must not overwrite a top-level property of the same name
            if is_reserved_attribute_name(name):
                logger.debug('Ignoring custom attribute "%s" in legacy user data because the name is reserved', name)
                continue
            b.set(name, value)
    if user.private_attribute_names is not None:
        for ref in user.private_attribute_names:
            b.private(ref.path)
