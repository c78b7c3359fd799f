import logging

from pulse_bridge.logger import ROOT_LOGGER, get_logger


def test_component_loggers_share_one_handler():
    scanner = get_logger("scanner")
    again = get_logger("scanner")
    root = logging.getLogger(ROOT_LOGGER)

    assert scanner is again
    assert scanner.name == "pulse_bridge.scanner"
    assert scanner.handlers == []
    assert len(root.handlers) == 1


def test_component_records_reach_caplog(caplog):
    with caplog.at_level(logging.INFO, logger=ROOT_LOGGER):
        get_logger("push").info("hello")
    assert ("pulse_bridge.push", logging.INFO, "hello") in caplog.record_tuples
