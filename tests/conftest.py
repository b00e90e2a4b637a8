"""Shared fixtures for pingreport tests."""

import logging

import pytest


@pytest.fixture
def orders_dir(tmp_path):
    path = tmp_path / "orders"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def write_order(orders_dir):
    """Write an order file and return its path."""

    def write(order_id: str, content: str):
        path = orders_dir / order_id
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def write_result(output_dir):
    """Write a last_result file for an order and return its path."""

    def write(order_id: str, content: str):
        directory = output_dir / order_id
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "last_result"
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger after a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
