"""Tests for the storage module.

Tests cover:
- FileQuestionPoolRepository get/list over JSON pool files
- Building a QuestionBank from a stored pool
- Read-only behavior for missing directories
- Storage configuration functions
"""

import json

import pytest
from pydantic import ValidationError

from sciencegame.engine.question_bank import QuestionBank
from sciencegame.storage import (
    FileQuestionPoolRepository,
    get_question_repository,
    get_questions_path,
)

POOL = {
    "name": "Basic Chemistry",
    "questions": [
        {"question_id": "h2o", "prompt": "Formula of water?", "correct_answer": "H2O"},
        {"question_id": "nacl", "prompt": "Table salt?", "correct_answer": "NaCl", "weight": 2},
    ],
}


def write_pool(directory, pool_id, pool):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{pool_id}.json").write_text(json.dumps(pool), encoding="utf-8")


class TestFileQuestionPoolRepository:
    """Tests for the JSON file-based pool repository."""

    @pytest.fixture
    def pools_dir(self, tmp_path):
        directory = tmp_path / "questions"
        write_pool(directory, "basic-chemistry", POOL)
        return directory

    @pytest.fixture
    def repo(self, pools_dir):
        return FileQuestionPoolRepository(pools_dir)

    def test_get_pool(self, repo):
        loaded = repo.get_pool("basic-chemistry")
        assert loaded["name"] == "Basic Chemistry"
        assert loaded["id"] == "basic-chemistry"
        assert len(loaded["questions"]) == 2

    def test_get_missing_pool(self, repo):
        assert repo.get_pool("nope") is None

    def test_list_pools_sorted_by_name(self, repo, pools_dir):
        write_pool(pools_dir, "astro", {"name": "Astronomy", "questions": [{"question_id": "x", "correct_answer": "8"}]})
        pools = repo.list_pools()
        assert [p["name"] for p in pools] == ["Astronomy", "Basic Chemistry"]
        assert pools[0]["id"] == "astro"
        assert pools[1]["question_count"] == 2

    def test_list_pools_name_defaults_to_file_stem(self, repo, pools_dir):
        write_pool(pools_dir, "unnamed", {"questions": []})
        names = [p["name"] for p in repo.list_pools()]
        assert "unnamed" in names

    def test_load_bank(self, repo):
        bank = repo.load_bank("basic-chemistry")
        assert isinstance(bank, QuestionBank)
        assert len(bank) == 2
        assert {bank.select("s", i).question_id for i in range(2)} == {"h2o", "nacl"}

    def test_load_missing_bank(self, repo):
        with pytest.raises(ValueError, match="not found"):
            repo.load_bank("nope")

    def test_load_bank_with_invalid_question(self, repo, pools_dir):
        write_pool(pools_dir, "broken", {"name": "Broken", "questions": [{"question_id": "x"}]})
        with pytest.raises(ValidationError):
            repo.load_bank("broken")

    def test_load_bank_with_duplicate_ids(self, repo, pools_dir):
        question = {"question_id": "dup", "correct_answer": "a"}
        write_pool(pools_dir, "dupes", {"name": "Dupes", "questions": [question, question]})
        with pytest.raises(ValueError):
            repo.load_bank("dupes")


class TestMissingDirectory:
    """A mistyped pools directory must not be created as a side effect."""

    def test_constructor_does_not_create_directory(self, tmp_path):
        missing = tmp_path / "typo"
        FileQuestionPoolRepository(missing)
        assert not missing.exists()

    def test_list_pools_on_missing_directory(self, tmp_path):
        missing = tmp_path / "typo"
        assert FileQuestionPoolRepository(missing).list_pools() == []
        assert not missing.exists()

    def test_load_bank_on_missing_directory(self, tmp_path):
        missing = tmp_path / "typo"
        with pytest.raises(ValueError, match="not found"):
            FileQuestionPoolRepository(missing).load_bank("basic-chemistry")
        assert not missing.exists()


class TestStorageConfig:
    def test_default_questions_path(self, monkeypatch):
        monkeypatch.delenv("SCIENCEGAME_QUESTIONS_PATH", raising=False)
        assert get_questions_path() == "questions"

    def test_questions_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCIENCEGAME_QUESTIONS_PATH", str(tmp_path / "pools"))
        repo = get_question_repository()
        assert repo.questions_path == tmp_path / "pools"
        assert not (tmp_path / "pools").exists()

    def test_explicit_path_overrides_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SCIENCEGAME_QUESTIONS_PATH", str(tmp_path / "pools"))
        repo = get_question_repository(str(tmp_path / "other"))
        assert repo.questions_path == tmp_path / "other"
