from boxman_api.config import load_cfg, reload_cfg


def test_defaults():
    cfg = load_cfg()
    assert cfg["systemctl_bin"] == "systemctl"
    assert cfg["list_timeout_secs"] == 10
    assert cfg["example"]["name"] == "pocketbase"
    assert cfg["example"]["base_dir"] == "~/pb"


def test_yaml_file_override(tmp_path, monkeypatch):
    path = tmp_path / "boxman.yaml"
    path.write_text("systemctl_bin: /bin/systemctl\nexample:\n  name: myapp\n")
    monkeypatch.setenv("BOXMAN_CONFIG", str(path))
    cfg = reload_cfg()
    assert cfg["systemctl_bin"] == "/bin/systemctl"
    assert cfg["list_timeout_secs"] == 10
    assert cfg["example"]["name"] == "myapp"
    assert cfg["example"]["exec"] == "pocketbase serve yourdomain.com"


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("BOXMAN_CONFIG", str(tmp_path / "yok.yaml"))
    cfg = reload_cfg()
    assert cfg["log_level"] == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("BOXMAN_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("BOXMAN_LIST_TIMEOUT", "3")
    cfg = reload_cfg()
    assert cfg["log_level"] == "DEBUG"
    assert cfg["list_timeout_secs"] == 3.0


def test_null_values_fall_back_to_defaults(tmp_path, monkeypatch):
    path = tmp_path / "boxman.yaml"
    path.write_text("list_timeout_secs: null\nsystemctl_bin:\nexample: null\n")
    monkeypatch.setenv("BOXMAN_CONFIG", str(path))
    cfg = reload_cfg()
    assert cfg["list_timeout_secs"] == 10
    assert cfg["systemctl_bin"] == "systemctl"
    assert cfg["example"]["name"] == "pocketbase"


def test_null_example_fields_fall_back(tmp_path, monkeypatch):
    path = tmp_path / "boxman.yaml"
    path.write_text("example:\n  name: myapp\n  user: null\n")
    monkeypatch.setenv("BOXMAN_CONFIG", str(path))
    cfg = reload_cfg()
    assert cfg["example"]["name"] == "myapp"
    assert cfg["example"]["user"] == "pocketbase"
