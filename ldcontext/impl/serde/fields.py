from typing import Any, Dict, List, Optional

from ldcontext.errors import InvalidTypeError, MissingFieldError

# Typed property readers shared by the intermediate shape parsers.
#
# Every optional reader treats a JSON null exactly like an absent property. Every reader raises
# InvalidTypeError if the property is present with the wrong JSON type, so that bad data is
# rejected at the boundary instead of reaching the context builder.
#
# Note that bool is a subclass of int in Python, and str is never a bool, so checks for str and
# bool below can use isinstance directly; the number check cannot.

_TYPE_DESCRIPTIONS = {
    str: 'a string',
    bool: 'a boolean',
    dict: 'an object',
    list: 'an array',
}


def opt_type(data: dict, name: str, desired_type) -> Any:
    value = data.get(name)
    if value is not None and not isinstance(value, desired_type):
        raise InvalidTypeError(name, _TYPE_DESCRIPTIONS.get(desired_type, str(desired_type)), value)
    return value


def opt_bool(data: dict, name: str) -> Optional[bool]:
    return opt_type(data, name, bool)


def opt_dict(data: dict, name: str) -> Optional[Dict[str, Any]]:
    return opt_type(data, name, dict)


def opt_str(data: dict, name: str) -> Optional[str]:
    return opt_type(data, name, str)


def opt_str_list(data: dict, name: str) -> Optional[List[str]]:
    items = opt_type(data, name, list)
    if items is None:
        return None
    return validate_list_type(items, name, str)


def req_str(data: dict, name: str) -> str:
    if name not in data:
        raise MissingFieldError(name)
    value = data[name]
    if not isinstance(value, str):
        raise InvalidTypeError(name, 'a string', value)
    return value


def validate_list_type(items: list, name: str, desired_type) -> list:
    for item in items:
        if not isinstance(item, desired_type):
            raise InvalidTypeError(name, 'an array of %s values' % desired_type.__name__, item)
    return items
