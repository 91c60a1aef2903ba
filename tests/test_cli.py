import pytest

from llmirc.cli import main


def _layout(root, skip=()):
    files = {
        "config/admin.cfg": "name: #admin\npassword: password\n",
        "config/channels.cfg": "#one\n",
        "logs/chat.log": "",
        "responses/response.json": "",
    }
    for relative, content in files.items():
        if relative in skip:
            continue
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.mark.parametrize(
    "missing, message",
    [
        ("config/admin.cfg", "Missing required config files"),
        ("config/channels.cfg", "Missing required config files"),
        ("logs/chat.log", "Missing required log file"),
        ("responses/response.json", "Missing required response file"),
    ],
)
def test_missing_files_stop_before_connecting(tmp_path, monkeypatch, capsys, missing, message):
    _layout(tmp_path, skip={missing})
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert message in capsys.readouterr().err


def test_empty_channel_list_is_rejected(tmp_path, monkeypatch, capsys):
    _layout(tmp_path)
    (tmp_path / "config/channels.cfg").write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "channels.cfg" in capsys.readouterr().err


def test_admin_config_without_name_is_rejected(tmp_path, monkeypatch, capsys):
    _layout(tmp_path)
    (tmp_path / "config/admin.cfg").write_text("password: password\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "name" in capsys.readouterr().err


def test_bad_port_is_a_usage_error(tmp_path, monkeypatch):
    _layout(tmp_path)
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit) as info:
        main(["--port", "not-a-number"])
    assert info.value.code == 2