"""
This submodule contains the entry points for converting contexts to and from JSON.

Three JSON formats are accepted when decoding:

* a single-kind context, such as ``{"kind": "org", "key": "org-key", "name": "Acme"}``;
* a multi-kind context, such as ``{"kind": "multi", "user": {"key": "u"}, "org": {"key": "o"}}``;
* the legacy user format, which has no ``kind`` and is always decoded as a context of kind
  "user", such as ``{"key": "u", "firstName": "Ann", "custom": {"team": "a"}}``.

Encoding always produces one of the first two formats.
"""

import json
from typing import Any, Dict, Optional, Union

from ldcontext.config import Config
from ldcontext.context import Context
from ldcontext.impl.serde.converter import context_from_variant
from ldcontext.impl.serde.encoder import ContextVariantEncoder, variant_to_dict
from ldcontext.impl.serde.projector import variant_from_context
from ldcontext.impl.serde.variant import parse_variant


class ContextCodec:
    """
    Converts contexts to and from their JSON representation using a specific :class:`ldcontext.Config`.

    A ContextCodec holds no mutable state; it is safe to share one across threads.
    """

    def __init__(self, config: Optional[Config] = None):
        self.__config = Config() if config is None else config
        self.__json_encoder = ContextVariantEncoder(compact=self.__config.compact_json)

    @property
    def config(self) -> Config:
        return self.__config

    def decode(self, data: Union[str, bytes, bytearray, Dict[str, Any]]) -> Context:
        """
        Decodes a context from any of the three supported JSON formats.

        :param data: either JSON text, or a JSON object that has already been parsed into a dict
        :return: a valid context
        :raises ldcontext.errors.ContextSerdeError: if the data does not represent a valid context
        :raises json.JSONDecodeError: if ``data`` is text that is not well-formed JSON
        """
        if isinstance(data, (str, bytes, bytearray)):
            data = json.loads(data)
        variant = parse_variant(data)
        return context_from_variant(variant, self.__config.logger)

    def encode(self, context: Context) -> Dict[str, Any]:
        """
        Encodes a context in the single-kind or multi-kind format, as a dict.

        :param context: a valid context
        :return: the JSON representation
        :raises ldcontext.errors.InvalidContextError: if the context is in an error state
        """
        return variant_to_dict(variant_from_context(context))

    def encode_json(self, context: Context) -> str:
        """
        Same as :func:`encode()`, but returns JSON text.
        """
        return self.__json_encoder.encode(variant_from_context(context))


_default_codec = ContextCodec()


def decode(data: Union[str, bytes, bytearray, Dict[str, Any]]) -> Context:
    """
    Decodes a context using the default configuration. See :func:`ContextCodec.decode()`.
    """
    return _default_codec.decode(data)


def encode(context: Context) -> Dict[str, Any]:
    """
    Encodes a context using the default configuration. See :func:`ContextCodec.encode()`.
    """
    return _default_codec.encode(context)


def encode_json(context: Context) -> str:
    """
    Encodes a context as JSON text using the default configuration. See :func:`ContextCodec.encode_json()`.
    """
    return _default_codec.encode_json(context)


__all__ = ['ContextCodec', 'decode', 'encode', 'encode_json']
