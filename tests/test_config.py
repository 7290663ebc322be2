import pytest
from pydantic import ValidationError

from sieve.config import SieveConfig, load_config


def test_defaults():
    cfg = load_config(None)
    assert cfg.dns.timeout == 5.0
    assert cfg.dns.nameservers == []
    assert cfg.formats.date == "%Y-%m-%d"


def test_load_yaml(tmp_path):
    path = tmp_path / "sieve.yaml"
    path.write_text(
        "dns:\n"
        "  timeout: 2\n"
        "  nameservers: [1.1.1.1]\n"
        "formats:\n"
        "  date: '%d/%m/%Y'\n"
    )
    cfg = load_config(path)
    assert cfg.dns.timeout == 2.0
    assert cfg.dns.nameservers == ["1.1.1.1"]
    assert cfg.formats.date == "%d/%m/%Y"
    assert cfg.formats.time == "%H:%M"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "sieve.yaml"
    path.write_text("")
    assert load_config(path) == SieveConfig()


def test_timeout_must_be_positive():
    with pytest.raises(ValidationError):
        SieveConfig(dns={"timeout": 0})
