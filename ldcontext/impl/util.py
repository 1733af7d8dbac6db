import logging

log = logging.getLogger('ldcontext')

# Attribute names that a legacy user's "custom" object is not allowed to overwrite, since they
# correspond to top-level properties of a context.
RESERVED_ATTRIBUTE_NAMES = frozenset(['kind', 'key', 'name', 'anonymous', '_meta'])


def is_reserved_attribute_name(name: str) -> bool:
    return name in RESERVED_ATTRIBUTE_NAMES
