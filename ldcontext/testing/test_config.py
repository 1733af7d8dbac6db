import logging

from ldcontext.config import Config
from ldcontext.impl.util import log


def test_defaults():
    config = Config()
    assert config.logger is log
    assert config.compact_json is True


def test_custom_logger():
    logger = logging.getLogger('my-app')
    assert Config(logger=logger).logger is logger


def test_copy_with():
    logger = logging.getLogger('my-app')
    old_config = Config(compact_json=False)

    new_config = old_config.copy_with(logger=logger)
    assert new_config.logger is logger
    assert new_config.compact_json is False

    newer_config = new_config.copy_with(compact_json=True)
    assert newer_config.logger is logger
    assert newer_config.compact_json is True
    assert old_config.logger is log
