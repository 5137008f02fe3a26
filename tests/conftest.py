import pytest
import tools.history_store as history_store
import tools.llm_logger as llm_logger
import tools.meaning_provider as meaning_provider
from tools.history_store import JsonFileStore


@pytest.fixture(autouse=True)
def temp_llm_log(tmp_path, monkeypatch):
    log_path = tmp_path / "Log" / "llm_log.json"
    monkeypatch.setenv("LLM_LOG_PATH", str(log_path))
    monkeypatch.setattr(llm_logger.LLMLogger, "_instance", None)
    return log_path


@pytest.fixture(autouse=True)
def temp_history_path(tmp_path, monkeypatch):
    path = tmp_path / "word_history.json"
    monkeypatch.setattr(history_store, "WORD_HISTORY_PATH", str(path))
    monkeypatch.setattr(meaning_provider, "MEANING_PROVIDER", "mock")
    return path


@pytest.fixture
def file_store(temp_history_path):
    return JsonFileStore(temp_history_path)
