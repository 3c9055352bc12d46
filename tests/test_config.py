from importlib import resources

from patientdash.config import API_URL_ENV, DEFAULT_CONFIG, load_config, merge_dicts


def test_merge_dicts_is_recursive():
    base = {"api": {"base_url": "a", "timeout_s": 10}, "map": {"enabled": True}}
    merged = merge_dicts(base, {"api": {"base_url": "b"}, "extra": 1})
    assert merged["api"] == {"base_url": "b", "timeout_s": 10}
    assert merged["map"] == {"enabled": True}
    assert merged["extra"] == 1


def test_defaults_ship_inside_the_package():
    assert resources.files("patientdash").joinpath(DEFAULT_CONFIG).is_file()


def test_defaults_load_outside_the_repository(tmp_path, monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    cfg = load_config()
    assert cfg.api["endpoint"] == "/api/patients"
    assert cfg.dashboard["category_field"] == "disease"
    assert cfg.dashboard["default_limit"] in cfg.dashboard["limit_options"]


def test_local_config_overrides_default(tmp_path, monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)
    (tmp_path / "config.local.yaml").write_text("api:\n  base_url: http://a\ndashboard:\n  default_limit: 10\n")
    cfg = load_config(tmp_path)
    assert cfg.api["base_url"] == "http://a"
    # untouched keys keep their packaged defaults
    assert cfg.api["endpoint"] == "/api/patients"
    assert cfg.dashboard["default_limit"] == 10
    assert cfg.dashboard["category_field"] == "disease"


def test_local_config_is_read_from_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "config.local.yaml").write_text("map:\n  enabled: false\n")
    monkeypatch.chdir(tmp_path)
    assert load_config().map["enabled"] is False


def test_env_overrides_base_url(tmp_path, monkeypatch):
    (tmp_path / "config.local.yaml").write_text("api:\n  base_url: http://a\n")
    monkeypatch.setenv(API_URL_ENV, "http://env")
    assert load_config(tmp_path).api["base_url"] == "http://env"
