from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def sandbox_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run inside a temp working directory with no PATHDB_* overrides so tests never touch real ./databases.
    """
    for name in ("PATHDB_JSON_PATH", "PATHDB_YAML_PATH", "PATHDB_MAX_DATA_SIZE", "PATHDB_JSON_INDENT", "PATHDB_SORT_KEYS"):
        # setenv first so the undo step also removes anything load_dotenv adds
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def json_db(sandbox_cwd: Path):
    from pathdb import JsonDatabase

    return JsonDatabase("databases/test.json")


@pytest.fixture
def yaml_db(sandbox_cwd: Path):
    from pathdb import YamlDatabase

    return YamlDatabase("databases/test.yml")


@pytest.fixture(params=["json", "yaml"])
def db(request: pytest.FixtureRequest, sandbox_cwd: Path):
    """Every database test runs once per codec."""
    from pathdb import JsonDatabase, YamlDatabase

    if request.param == "json":
        return JsonDatabase("databases/param.json")
    return YamlDatabase("databases/param.yml")
