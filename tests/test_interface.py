import importlib
import json

from FlashcardsModule import FlashcardClient
from tools.history_store import MemoryStore
from tools.meaning_provider import UpstreamError

interface = importlib.import_module("frontend_service.interface")


class FakeProvider:
    def generate_meaning(self, word, detailed=False):
        return f"{word} {'detailed' if detailed else 'brief'}"


class BrokenProvider:
    def generate_meaning(self, word, detailed=False):
        raise UpstreamError("API Error: <500>")


def test_start_session_loads_saved_history(temp_history_path):
    temp_history_path.write_text(
        json.dumps({"wordHistory": json.dumps([{"word": "cat", "meaning": "猫"}])}),
        encoding="utf-8",
    )
    client, _, _, error_html = interface.start_session(None)
    assert [card.word for card in client.word_history] == ["cat"]
    assert error_html == ""


def test_start_session_keeps_existing_client():
    client = FlashcardClient(FakeProvider(), MemoryStore())
    same, *_ = interface.start_session(client)
    assert same is client


def test_mark_loading_disables_button():
    update = interface.mark_loading()
    assert update["value"] == interface.LOADING_LABEL
    assert update["interactive"] is False


def test_search_word_adds_card_and_resets_button():
    client = FlashcardClient(FakeProvider(), MemoryStore())
    client, _, _, error_html, button = interface.search_word("cat", client)
    assert interface.card_samples(client.cards) == [["cat", "cat brief"]]
    assert interface.card_samples(client.word_history) == [["cat", "cat brief"]]
    assert error_html == ""
    assert button["value"] == interface.SEARCH_LABEL
    assert button["interactive"] is True


def test_search_word_shows_escaped_error():
    client = FlashcardClient(BrokenProvider(), MemoryStore())
    client, _, _, error_html, _ = interface.search_word("cat", client)
    assert "error-message" in error_html
    assert "API Error: &lt;500&gt;" in error_html
    assert client.cards == []


def test_open_card_at_index_and_close():
    client = FlashcardClient(FakeProvider(), MemoryStore())
    client.submit("cat")
    client, group, title, meaning, _ = interface.open_card_at(0, client)
    assert group["visible"] is True
    assert title == "## cat"
    assert meaning == "cat detailed"

    client, group, title, meaning = interface.close_card(client)
    assert group["visible"] is False
    assert (title, meaning) == ("", "")
    assert client.selected_word is None
    assert client.detailed_meaning == ""


def test_open_history_entry():
    store = MemoryStore({"wordHistory": json.dumps([{"word": "dog", "meaning": "犬"}])})
    client = FlashcardClient(FakeProvider(), store)
    client.load_history()
    client, group, title, meaning, _ = interface.open_history_at(0, client)
    assert title == "## dog"
    assert meaning == "dog detailed"


def test_open_card_out_of_range_is_ignored():
    client = FlashcardClient(FakeProvider(), MemoryStore())
    client, *_ = interface.open_card_at(3, client)
    assert client.modal_open is False
    assert client.selected_word is None


def test_sessions_share_one_provider(monkeypatch):
    monkeypatch.setattr(interface, "_provider", None)
    first, *_ = interface.start_session(None)
    second, *_ = interface.start_session(None)
    assert first is not second
    assert first.provider is second.provider
