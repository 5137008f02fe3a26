import os
import logging
import html
import gradio as gr
from dotenv import load_dotenv
from FlashcardsModule import create_client
from tools.meaning_provider import get_meaning_provider

dotenv_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".env"))
load_dotenv(dotenv_path)

logger = logging.getLogger(__name__)
SEARCH_LABEL = "検索"
LOADING_LABEL = "読み込み中..."
CSS = """
* { font-family: 'Segoe UI', 'Hiragino Sans', 'Meiryo', sans-serif; }
.gradio-container {
    max-width: 960px !important;
    margin: 0 auto;
}
.error-message {
    color: #d64545;
    font-weight: bold;
}
#detail-panel {
    border: 2px solid #4a90e2;
    border-radius: 12px;
    padding: 12px;
}
"""


def card_samples(cards) -> list[list[str]]:
    return [[card.word, card.meaning] for card in cards]


def render_error(client) -> str:
    if not client.error:
        return ""
    return f"<p class='error-message'>{html.escape(client.error)}</p>"


_provider = None


def get_shared_provider():
    """One provider (and connection pool) for every browser session."""
    global _provider
    if _provider is None:
        _provider = get_meaning_provider()
    return _provider


def _ensure_client(client):
    if client is None:
        client = create_client(provider=get_shared_provider())
    return client


def _word_at(cards, index) -> str:
    if index is None or not 0 <= index < len(cards):
        return ""
    return cards[index].word


def start_session(client):
    """Create the session's client on page load and show the saved history."""
    client = _ensure_client(client)
    return (
        client,
        gr.Dataset(samples=card_samples(client.cards)),
        gr.Dataset(samples=card_samples(client.word_history)),
        render_error(client),
    )


def mark_loading():
    return gr.update(value=LOADING_LABEL, interactive=False)


def search_word(word: str, client):
    client = _ensure_client(client)
    client.submit(word)
    return (
        client,
        gr.Dataset(samples=card_samples(client.cards)),
        gr.Dataset(samples=card_samples(client.word_history)),
        render_error(client),
        gr.update(value=SEARCH_LABEL, interactive=True),
    )


def open_card(word: str, client):
    """Clicking a card or history tile opens the detail panel."""
    client = _ensure_client(client)
    if not word:
        return client, gr.update(), gr.update(), gr.update(), render_error(client)
    client.open_detail(word)
    return (
        client,
        gr.update(visible=client.modal_open),
        f"## {client.selected_word}",
        client.detailed_meaning,
        render_error(client),
    )


def open_card_at(index: int, client):
    client = _ensure_client(client)
    return open_card(_word_at(client.cards, index), client)


def open_history_at(index: int, client):
    client = _ensure_client(client)
    return open_card(_word_at(client.word_history, index), client)


def close_card(client):
    client = _ensure_client(client)
    client.close_detail()
    return client, gr.update(visible=False), "", ""


def build_interface() -> gr.Blocks:
    with gr.Blocks(css=CSS, theme=gr.themes.Soft(), title="英単語学習アプリ") as demo:
        client_state = gr.State()
        gr.Markdown("<h1>英単語学習アプリ</h1>")
        with gr.Row():
            word_input = gr.Textbox(
                placeholder="英単語を入力", show_label=False, scale=4
            )
            search_btn = gr.Button(SEARCH_LABEL, variant="primary", scale=1)
        error_box = gr.Markdown()

        with gr.Group(visible=False, elem_id="detail-panel") as detail_group:
            detail_title = gr.Markdown()
            detail_meaning = gr.Markdown()
            close_btn = gr.Button("閉じる")

        cards_view = gr.Dataset(
            components=["textbox", "textbox"],
            headers=["単語", "意味"],
            samples=[],
            label="単語カード",
            type="index",
        )
        history_view = gr.Dataset(
            components=["textbox", "textbox"],
            headers=["単語", "意味"],
            samples=[],
            label="検索履歴",
            type="index",
        )

        demo.load(
            start_session,
            [client_state],
            [client_state, cards_view, history_view, error_box],
        )

        search_outputs = [client_state, cards_view, history_view, error_box, search_btn]
        search_btn.click(mark_loading, None, [search_btn]).then(
            search_word, [word_input, client_state], search_outputs
        )
        word_input.submit(mark_loading, None, [search_btn]).then(
            search_word, [word_input, client_state], search_outputs
        )

        detail_outputs = [
            client_state,
            detail_group,
            detail_title,
            detail_meaning,
            error_box,
        ]
        cards_view.click(open_card_at, [cards_view, client_state], detail_outputs)
        history_view.click(
            open_history_at, [history_view, client_state], detail_outputs
        )
        close_btn.click(
            close_card,
            [client_state],
            [client_state, detail_group, detail_title, detail_meaning],
        )

    return demo


def launch_gradio(**kwargs) -> None:
    demo = build_interface()
    demo.launch(**kwargs)
