"""Shared pytest fixtures and configuration."""

import pytest
import tempfile
from pathlib import Path

from dds_security_config import constants
from dds_security_config.error_state import reset_error
from dds_security_config.files import MANDATORY_FILES
from dds_security_config.logging_config import XmlDocumentReader

MANDATORY_FILE_NAMES = list(MANDATORY_FILES.values())


def logging_xml(body: str) -> str:
    """Wrap `body` in a security_log descriptor document."""
    return (
        "<?xml version='1.0' encoding='UTF-8'?>\n"
        "<security_log version='1'>\n"
        f"{body}\n"
        "</security_log>\n"
    )


@pytest.fixture(autouse=True)
def clear_error_state():
    """Start and finish every test without a recorded error."""
    reset_error()
    yield
    reset_error()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def security_root(temp_dir):
    """Create a security root holding every mandatory security file."""
    for file_name in MANDATORY_FILE_NAMES:
        (temp_dir / file_name).write_text(f"contents of {file_name}")
    return temp_dir


@pytest.fixture
def write_logging_xml(security_root):
    """Write a logging descriptor into the security root."""

    def _write(body: str) -> Path:
        xml_file = security_root / constants.LOGGING_FILE_NAME
        xml_file.write_text(logging_xml(body))
        return xml_file

    return _write


@pytest.fixture
def logging_document():
    """Build an in-memory logging descriptor document."""

    def _build(body: str) -> XmlDocumentReader:
        return XmlDocumentReader.from_string(logging_xml(body))

    return _build
