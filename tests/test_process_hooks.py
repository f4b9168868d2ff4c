import asyncio
import logging
import sys

from sim_mcp.__main__ import _log_loop_exception, install_process_hooks


def test_install_process_hooks_sets_handlers(monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    loop = asyncio.new_event_loop()
    try:
        install_process_hooks(loop)
        assert sys.excepthook is not sys.__excepthook__
        assert loop.get_exception_handler() is _log_loop_exception
    finally:
        loop.close()


def test_uncaught_exception_is_logged_not_raised(monkeypatch, caplog):
    monkeypatch.setattr(sys, "excepthook", sys.__excepthook__)
    install_process_hooks()
    try:
        raise RuntimeError("kaboom")
    except RuntimeError:
        exc_info = sys.exc_info()
    with caplog.at_level(logging.ERROR, logger="sim_mcp"):
        sys.excepthook(*exc_info)
    assert "Uncaught exception" in caplog.text


def test_loop_exception_handler_logs(caplog):
    loop = asyncio.new_event_loop()
    try:
        with caplog.at_level(logging.ERROR, logger="sim_mcp"):
            _log_loop_exception(loop, {"message": "Task exception was never retrieved", "exception": ValueError("x")})
    finally:
        loop.close()
    assert "Task exception was never retrieved" in caplog.text
