"""
Tests for logging setup
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler

import pytest

from lib.logging_utils import configureLogger, getLogLevelByStr, initLogging


@pytest.fixture
def rootLoggerState():
    """Restore root and httpx loggers after test"""
    rootLogger = logging.getLogger()
    handlers = rootLogger.handlers[:]
    level = rootLogger.level
    httpxLevel = logging.getLogger("httpx").level
    yield rootLogger
    for handler in rootLogger.handlers[:]:
        rootLogger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        rootLogger.addHandler(handler)
    rootLogger.setLevel(level)
    logging.getLogger("httpx").setLevel(httpxLevel)


@pytest.mark.parametrize(
    "levelStr, expected",
    [("debug", logging.DEBUG), ("INFO", logging.INFO), ("Warning", logging.WARNING), ("nonsense", None)],
)
def testGetLogLevelByStr(levelStr, expected):
    assert getLogLevelByStr(levelStr) == expected


def testGetLogLevelByStrDefault():
    assert getLogLevelByStr("basicConfig", logging.ERROR) == logging.ERROR


def testConfigureLoggerFile(tmp_path):
    localLogger = logging.getLogger("geonorge.test.file")
    logFile = tmp_path / "logs" / "lookup.log"

    configureLogger(localLogger, {"level": "DEBUG", "file": str(logFile), "file-level": "ERROR", "propagate": False})
    try:
        assert localLogger.level == logging.DEBUG
        assert localLogger.propagate is False
        assert len(localLogger.handlers) == 1
        assert localLogger.handlers[0].level == logging.ERROR

        localLogger.error("Lookup failed")
        localLogger.info("Not written")
        localLogger.handlers[0].flush()
        content = logFile.read_text()
        assert "Lookup failed" in content
        assert "Not written" not in content
    finally:
        for handler in localLogger.handlers[:]:
            localLogger.removeHandler(handler)
            handler.close()


def testConfigureLoggerRotate(tmp_path):
    localLogger = logging.getLogger("geonorge.test.rotate")

    configureLogger(localLogger, {"file": str(tmp_path / "lookup.log"), "rotate": True})
    try:
        assert isinstance(localLogger.handlers[0], TimedRotatingFileHandler)
    finally:
        for handler in localLogger.handlers[:]:
            localLogger.removeHandler(handler)
            handler.close()


def testInitLoggingDefaults(rootLoggerState):
    initLogging({})

    assert rootLoggerState.level == logging.INFO
    assert len(rootLoggerState.handlers) == 1
    assert rootLoggerState.handlers[0].stream is sys.stderr
    assert logging.getLogger("httpx").level == logging.WARNING


def testInitLoggingProduction(rootLoggerState):
    initLogging({}, production=True)

    assert rootLoggerState.level == logging.WARNING


def testInitLoggingPerLogger(rootLoggerState):
    initLogging({"level": "DEBUG", "console": False, "logger": {"lib.geonorge": {"level": "ERROR"}}})

    assert rootLoggerState.level == logging.DEBUG
    assert rootLoggerState.handlers == []
    assert logging.getLogger("lib.geonorge").level == logging.ERROR
    logging.getLogger("lib.geonorge").setLevel(logging.NOTSET)
