import logging

from potions.commons.potions_logger import PotionsLogger
from potions.configs import PROJECT_NAME


def test_logger_is_a_shared_named_logger():
    logger = PotionsLogger()
    assert isinstance(logger, logging.Logger)
    assert logger is PotionsLogger()
    assert logger.name == PROJECT_NAME
