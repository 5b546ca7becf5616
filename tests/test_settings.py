from __future__ import annotations

from pathdb import JsonDatabase, YamlDatabase, get_settings


def test_defaults(sandbox_cwd):
    s = get_settings()
    assert s.json_path == "databases/db.json"
    assert s.yaml_path == "databases/db.yml"
    assert s.max_data_size is None
    assert s.json_indent == 4
    assert s.sort_keys is False


def test_environment_overrides(sandbox_cwd, monkeypatch):
    monkeypatch.setenv("PATHDB_JSON_PATH", "state/app.json")
    monkeypatch.setenv("PATHDB_YAML_PATH", "state/app")
    monkeypatch.setenv("PATHDB_MAX_DATA_SIZE", "1")
    monkeypatch.setenv("PATHDB_JSON_INDENT", "2")
    monkeypatch.setenv("PATHDB_SORT_KEYS", "yes")

    j = JsonDatabase()
    assert j.path == sandbox_cwd / "state" / "app.json"
    assert j.max_data_size == 1
    j.set("k", {"b": 1, "a": 2})
    assert j.path.read_text(encoding="utf-8") == '{\n  "k": {\n    "a": 2,\n    "b": 1\n  }\n}\n'

    y = YamlDatabase()
    assert y.path == sandbox_cwd / "state" / "app.yml"


def test_explicit_arguments_beat_environment(sandbox_cwd, monkeypatch):
    monkeypatch.setenv("PATHDB_MAX_DATA_SIZE", "1")
    db = JsonDatabase("databases/explicit.json", max_data_size=3)
    assert db.max_data_size == 3


def test_invalid_numbers_fall_back(sandbox_cwd, monkeypatch):
    monkeypatch.setenv("PATHDB_MAX_DATA_SIZE", "lots")
    monkeypatch.setenv("PATHDB_JSON_INDENT", "")
    s = get_settings()
    assert s.max_data_size is None
    assert s.json_indent == 4


def test_env_file(sandbox_cwd):
    env_file = sandbox_cwd / "local.env"
    env_file.write_text("PATHDB_MAX_DATA_SIZE=7\nPATHDB_JSON_PATH=from_env/db.json\n", encoding="utf-8")

    s = get_settings(env_file=str(env_file))
    assert s.max_data_size == 7
    assert s.json_path == "from_env/db.json"
