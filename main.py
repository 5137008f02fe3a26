from dotenv import load_dotenv
from FlashcardsModule import FlashcardClient, create_client
from tools.history_store import get_history_store
from tools.meaning_provider import get_meaning_provider
import argparse
import logging
import os
import sys

# Load environment variables from .env
dotenv_path = os.path.join(os.path.dirname(__file__), ".env")
load_dotenv(dotenv_path)


def lookup(word: str, detailed: bool = False, provider: str = None) -> int:
    """Look up one word from the command line and print the explanation."""
    with get_meaning_provider(provider) as meaning_provider:
        client = create_client(provider=meaning_provider)
        if detailed:
            client.open_detail(word)
            text = client.detailed_meaning
        else:
            card = client.submit(word)
            text = card.meaning if card else ""
    if client.error:
        print(f"Error: {client.error}", file=sys.stderr)
        return 1
    print(f"{word}: {text}")
    return 0


def show_history() -> int:
    # reading the history needs no meaning provider
    client = FlashcardClient(provider=None, store=get_history_store())
    client.load_history()
    if not client.word_history:
        print("No words looked up yet.")
        return 0
    print("---- Word History ----")
    for i, card in enumerate(client.word_history, start=1):
        print(f"{i}. {card.word}: {card.meaning}")
    return 0


def serve(host: str, port: int) -> None:
    """Run the proxy with the Gradio client mounted at /ui."""
    import gradio as gr
    import uvicorn
    from backend.app import app
    from frontend_service import build_interface

    gr.mount_gradio_app(app, build_interface(), path="/ui")
    uvicorn.run(app, host=host, port=port)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="English word flashcards")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Launch the Gradio flashcard client")

    serve_parser = subparsers.add_parser(
        "serve", help="Run the Gemini proxy (client mounted at /ui)"
    )
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=8000)

    lookup_parser = subparsers.add_parser("lookup", help="Look up a single word")
    lookup_parser.add_argument("word")
    lookup_parser.add_argument(
        "--detailed", action="store_true", help="Ask for the detailed explanation"
    )
    lookup_parser.add_argument(
        "--provider", choices=["mock", "proxy"], help="Override MEANING_PROVIDER"
    )

    subparsers.add_parser("history", help="Print the saved word history")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.command == "lookup":
        return lookup(args.word, detailed=args.detailed, provider=args.provider)
    if args.command == "history":
        return show_history()
    if args.command == "serve":
        serve(args.host, args.port)
        return 0

    from frontend_service import launch_gradio

    launch_gradio()
    return 0


if __name__ == "__main__":
    sys.exit(main())
