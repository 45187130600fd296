"""Tests for resolver configuration loading."""

import pytest

from check_soa.config import DNS_PORT, load_resolver_config
from check_soa.errors import ConfigUnavailable


def test_load_resolver_config(tmp_path):
    path = tmp_path / "resolv.conf"
    path.write_text("# local\nnameserver 192.0.2.53\nnameserver 2001:db8::53\noptions ndots:1\n")

    config = load_resolver_config(str(path))

    assert config.nameservers == ["192.0.2.53", "2001:db8::53"]
    assert config.port == DNS_PORT


def test_missing_file_is_config_unavailable(tmp_path):
    with pytest.raises(ConfigUnavailable) as excinfo:
        load_resolver_config(str(tmp_path / "missing.conf"))

    assert str(excinfo.value).startswith("Cannot initialize the local resolver")


def test_file_without_nameserver_is_config_unavailable(tmp_path):
    path = tmp_path / "resolv.conf"
    path.write_text("search example.\n")

    with pytest.raises(ConfigUnavailable):
        load_resolver_config(str(path))
