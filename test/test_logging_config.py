"""Tests for the package logger setup."""

import logging

import pytest

from reuleauxmesh import mesh_reuleaux_tetrahedron
from reuleauxmesh.logging_config import setup_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("reuleauxmesh")
    yield logger
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


def test_single_console_handler(package_logger):
    setup_logging()
    setup_logging()
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.INFO


def test_log_file(package_logger, tmp_path):
    log_file = tmp_path / "reuleaux.log"
    setup_logging(logging.DEBUG, log_file=str(log_file))
    mesh_reuleaux_tetrahedron(n_steps=2)
    for handler in package_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Built Reuleaux tetrahedron mesh with n_steps=2: 24 points, 16 cells" in text
    assert "DEBUG" in text
    package_logger.handlers[-1].close()


def test_build_logs_at_info(caplog):
    with caplog.at_level(logging.INFO, logger="reuleauxmesh"):
        mesh_reuleaux_tetrahedron(n_steps=1)
    assert any(
        record.levelno == logging.INFO and record.name == "reuleauxmesh.reuleaux_tetrahedron"
        for record in caplog.records
    )
