import json
from unittest.mock import patch

import pytest

from registration.utils import REPO_ROOT, env_path, load_json_file, save_json_file


def test_save_json_file_creates_parents_and_content(tmp_path):
    path = tmp_path / "nested" / "teams.json"
    data = [{"teamName": "Équipe", "contact": 9999999999}]

    save_json_file(path, data)

    assert path.is_file()
    assert json.loads(path.read_text(encoding="utf-8")) == data
    assert load_json_file(path) == data


def test_save_json_file_keeps_previous_content_on_failure(tmp_path):
    path = tmp_path / "teams.json"
    save_json_file(path, [{"id": "a"}])

    with pytest.raises(TypeError):
        save_json_file(path, [{"id": object()}])

    assert load_json_file(path) == [{"id": "a"}]
    assert [p.name for p in tmp_path.iterdir()] == ["teams.json"]


def test_load_json_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_file(tmp_path / "missing.json")


def test_env_path_resolves_relative_to_repo_root(tmp_path):
    with patch.dict("os.environ", {"TEAMS_TEST_FILE": "data/x.json"}):
        assert env_path("TEAMS_TEST_FILE", "ignored.json") == (REPO_ROOT / "data" / "x.json").resolve()

    with patch.dict("os.environ", {"TEAMS_TEST_FILE": str(tmp_path / "abs.json")}):
        assert env_path("TEAMS_TEST_FILE", "ignored.json") == (tmp_path / "abs.json").resolve()

    with patch.dict("os.environ", {}, clear=False):
        assert env_path("TEAMS_TEST_FILE_UNSET", "data/teams.json") == (REPO_ROOT / "data" / "teams.json").resolve()
