"""Tests: settings, logging and how they steer rendering."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from hostaddr.config import HostaddrSettings, get_settings
from hostaddr.core.host import Host
from hostaddr.core.ipv6 import CompressionPolicy, IPv6Address
from hostaddr.errors import FormatError
from hostaddr.utils.logger import get_logger

pytestmark = [pytest.mark.config]


def test_defaults():
    settings = get_settings()
    assert isinstance(settings, HostaddrSettings)
    assert settings.logging.log == "WARNING"
    assert settings.logging.log_dir is None
    assert settings.format.ipv6_compression == "longest"
    assert CompressionPolicy.default() is CompressionPolicy.LONGEST


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_compression_policy_from_env(use_settings):
    address = IPv6Address.parse("2001:db8:0:1:0:0:0:1")
    assert address.name == "2001:db8:0:1::1"

    use_settings(HOSTADDR_FORMAT_IPV6_COMPRESSION="first")
    assert CompressionPolicy.default() is CompressionPolicy.FIRST
    assert address.name == "2001:db8::1:0:0:0:1"
    assert str(Host(address, 80)) == "[2001:db8::1:0:0:0:1]:80"
    # An explicit policy wins over the configured one
    assert address.compressed(CompressionPolicy.LONGEST) == "2001:db8:0:1::1"


def test_invalid_compression_policy(use_settings):
    use_settings(HOSTADDR_FORMAT_IPV6_COMPRESSION="middle")
    with pytest.raises(ValidationError):
        get_settings()


def test_rejected_input_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="hostaddr")
    with pytest.raises(FormatError):
        Host.parse("bogus")
    assert "Rejected host 'bogus'" in caplog.text


@pytest.fixture
def fresh_logger():
    """Rebuild the hostaddr logger from current settings, restoring it afterwards."""
    logger = logging.getLogger("hostaddr")
    handlers, level = list(logger.handlers), logger.level
    get_logger.cache_clear()
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    get_logger.cache_clear()


def test_log_level_from_env(use_settings, fresh_logger):
    use_settings(HOSTADDR_LOG="debug")
    assert get_logger().level == logging.DEBUG


def test_file_logging(use_settings, fresh_logger, tmp_path):
    log_dir = tmp_path / "logs"
    use_settings(HOSTADDR_LOG="DEBUG", HOSTADDR_LOG_DIR=str(log_dir))

    logger = get_logger()
    with pytest.raises(FormatError):
        Host.parse("[::1")
    for handler in logger.handlers:
        handler.flush()

    text = (log_dir / "hostaddr.log").read_text()
    assert "Rejected host '[::1'" in text
    assert "malformed_bracket" in text


def test_rejected_host_is_logged_once(caplog):
    caplog.set_level(logging.DEBUG, logger="hostaddr")
    with pytest.raises(FormatError):
        Host.parse("2001:db8::1::1")
    rejected = [r for r in caplog.records if r.getMessage().startswith("Rejected")]
    assert len(rejected) == 1
    assert rejected[0].getMessage() == "Rejected host '2001:db8::1::1': ambiguous_compression"


def test_env_example_matches_settings(tmp_path):
    from scripts.generate_env_example import main

    output = tmp_path / ".env.example"
    assert main(output) == 0

    generated = output.read_text().splitlines()
    assert "HOSTADDR_LOG=WARNING" in generated
    assert "HOSTADDR_LOG_DIR=" in generated
    assert "HOSTADDR_FORMAT_IPV6_COMPRESSION=longest" in generated

    committed = Path(__file__).parent.parent / ".env.example"
    assert generated == committed.read_text().splitlines()
