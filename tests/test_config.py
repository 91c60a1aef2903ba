import pytest

from llmirc.config import (
    MAX_CHANNELS,
    AdminConfig,
    ConfigError,
    parse_admin_config,
    parse_channels,
    read_admin_config,
    read_channels,
)


def test_parse_channels_strips_newlines():
    assert parse_channels(["#one\n", "#two\n", "#three"]) == ["#one", "#two", "#three"]


def test_parse_channels_limits_count():
    lines = [f"#c{n}\n" for n in range(MAX_CHANNELS + 5)]
    channels = parse_channels(lines)
    assert len(channels) == MAX_CHANNELS
    assert channels[-1] == f"#c{MAX_CHANNELS - 1}"


def test_parse_channels_empty_is_error():
    with pytest.raises(ConfigError):
        parse_channels([])


def test_parse_admin_config_reads_both_values():
    password = "password"
    config = parse_admin_config(["name: #admin\n", f"password: {password}\n"])
    assert config == AdminConfig(name="#admin", password=password)


def test_parse_admin_config_later_lines_win():
    config = parse_admin_config(
        ["name: #first\n", "password: secret\n", "name: #second\n"]
    )
    assert config.name == "#second"
    assert config.password == "secret"


def test_parse_admin_config_missing_name():
    with pytest.raises(ConfigError):
        parse_admin_config(["password: secret\n"])


def test_parse_admin_config_missing_password():
    with pytest.raises(ConfigError):
        parse_admin_config(["name: #admin\n"])


def test_read_channels_from_file(tmp_path):
    path = tmp_path / "channels.cfg"
    path.write_text("#alpha\n#beta\n", encoding="utf-8")
    assert read_channels(path) == ["#alpha", "#beta"]


def test_read_admin_config_from_file(tmp_path):
    path = tmp_path / "admin.cfg"
    path.write_text("name: #ops\npassword: token\n", encoding="utf-8")
    config = read_admin_config(path)
    assert (config.name, config.password) == ("#ops", "token")


def test_read_missing_files_raise(tmp_path):
    with pytest.raises(ConfigError):
        read_channels(tmp_path / "absent.cfg")
    with pytest.raises(ConfigError):
        read_admin_config(tmp_path / "absent.cfg")