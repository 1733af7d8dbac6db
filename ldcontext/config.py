"""
This submodule contains the :class:`Config` class for custom configuration of the context codec.
"""

import logging
from typing import Optional

from ldcontext.impl.util import log


class Config:
    """
    Advanced configuration options for :class:`ldcontext.ContextCodec`.

    The module-level functions :func:`ldcontext.decode()`, :func:`ldcontext.encode()` and
    :func:`ldcontext.encode_json()` use a default Config, which is right for most applications.
    A Config is immutable, so one instance can be shared by any number of codecs and threads.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, compact_json: bool = True):
        """
        :param logger: the logger that the codec writes debug messages to; defaults to the
          ``ldcontext`` logger
        :param compact_json: True if :func:`ldcontext.ContextCodec.encode_json()` should omit
          the whitespace after separators
        """
        self.__logger = log if logger is None else logger
        self.__compact_json = compact_json

    def copy_with(self, logger: Optional[logging.Logger] = None, compact_json: Optional[bool] = None) -> 'Config':
        """
        Returns a new Config with the same properties, apart from any that are specified here.
        """
        return Config(
            logger=self.__logger if logger is None else logger,
            compact_json=self.__compact_json if compact_json is None else compact_json,
        )

    @property
    def logger(self) -> logging.Logger:
        return self.__logger

    @property
    def compact_json(self) -> bool:
        return self.__compact_json


__all__ = ['Config']
