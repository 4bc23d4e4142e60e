import logging

import pytest

import orbit_capture
from capture_core.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    logger = logging.getLogger("capture_core")
    level, handlers = logger.level, list(logger.handlers)
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_setup_logging_replaces_handlers_and_writes_file(tmp_path):
    log_file = tmp_path / "run.log"
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, str(log_file))
    assert logger.name == "capture_core"
    assert len(logger.handlers) == 2
    logging.getLogger("capture_core.layout").debug("placing bodies")
    for handler in logger.handlers:
        handler.flush()
    assert "placing bodies" in log_file.read_text(encoding="utf-8")


def test_headless_run_prints_totals(capsys):
    assert orbit_capture.main(["--frames", "20", "--seed", "3", "--log-level", "ERROR"]) == 0
    out = capsys.readouterr().out
    assert "frames=20" in out
    assert "spawned=" in out


def test_list_presets(capsys):
    assert orbit_capture.main(["--list-presets", "--log-level", "ERROR"]) == 0
    out = capsys.readouterr().out
    assert "edge_entry" in out
    assert "damped_rings" in out


def test_unknown_preset_exits_with_configuration_error():
    assert orbit_capture.main(["--preset", "no_such_preset", "--frames", "1", "--log-level", "ERROR"]) == 2


def test_setup_logging_accepts_level_names():
    logger = setup_logging("warning")
    assert logger.level == logging.WARNING
    assert all(h.level == logging.WARNING for h in logger.handlers)
