"""Client state for the flashcard screen.

:class:`FlashcardClient` owns everything the screen shows: the text in the
input box, the cards looked up in this session, the persisted history, the
loading/error flags and the detail view.  Explanations come from a meaning
provider (see ``tools.meaning_provider``) and the history is written to a
key-value store handle, both passed in by the caller.
"""
import logging
from typing import List, Optional

from tools.history_store import get_history_store
from tools.meaning_provider import get_meaning_provider

from .history import HistoryDeserializationError, load_history, save_history
from .word_card import WordCard, contains_word

UNKNOWN_ERROR = "未知のエラーが発生しました"

logger = logging.getLogger(__name__)


class FlashcardClient:
    """
    Holds the UI state of one flashcard session.
    """

    def __init__(self, provider, store):
        self.provider = provider
        self.store = store

        self.word = ""
        self.cards: List[WordCard] = []
        self.word_history: List[WordCard] = []
        self.loading = False
        self.error: Optional[str] = None
        self.modal_open = False
        self.selected_word: Optional[str] = None
        self.detailed_meaning = ""

    def load_history(self) -> List[WordCard]:
        """Restore the persisted history; a broken entry leaves it empty."""
        try:
            self.word_history = load_history(self.store)
        except HistoryDeserializationError as e:
            logger.warning("Failed to load word history: %s", e)
            self.word_history = []
        return self.word_history

    def submit(self, word: str) -> Optional[WordCard]:
        """Handle the search box: blank input is ignored."""
        self.word = word
        if not word or not word.strip():
            return None
        return self.lookup_word(word.strip())

    def lookup_word(self, word: str) -> Optional[WordCard]:
        """
        Fetch the brief explanation of ``word`` and record it as a card.

        Returns the card for ``word`` (an existing one when the word was
        already looked up), or None when the lookup failed.
        """
        meaning = self._generate(word, detailed=False)
        if meaning is None:
            return None

        for card in self.cards:
            if card.key == word.lower():
                return card

        new_card = WordCard(word=word, meaning=meaning)
        self.cards = [*self.cards, new_card]
        if not contains_word(self.word_history, word):
            updated_history = [*self.word_history, new_card]
            try:
                save_history(self.store, updated_history)
            except (OSError, ValueError) as e:
                logger.error("Failed to persist word history: %s", e)
                self.error = str(e) or UNKNOWN_ERROR
            self.word_history = updated_history
        logger.info("Added card for %r", word)
        return new_card

    def lookup_detail(self, word: str) -> str:
        """Fetch the detailed explanation shown in the detail view."""
        meaning = self._generate(word, detailed=True)
        if meaning is not None:
            self.detailed_meaning = meaning
        return self.detailed_meaning

    def open_detail(self, word: str) -> str:
        self.selected_word = word
        self.modal_open = True
        return self.lookup_detail(word)

    def close_detail(self) -> None:
        self.modal_open = False
        self.selected_word = None
        self.detailed_meaning = ""

    def _generate(self, word: str, detailed: bool) -> Optional[str]:
        self.loading = True
        self.error = None
        try:
            return self.provider.generate_meaning(word, detailed=detailed)
        except Exception as e:
            logger.error("Lookup for %r failed: %s", word, e)
            self.error = str(e) or UNKNOWN_ERROR
            return None
        finally:
            self.loading = False

    def to_dict(self) -> dict:
        """Snapshot of the state, e.g. for rendering or a JSON API."""
        return {
            "word": self.word,
            "cards": [card.to_dict() for card in self.cards],
            "word_history": [card.to_dict() for card in self.word_history],
            "loading": self.loading,
            "error": self.error,
            "modal_open": self.modal_open,
            "selected_word": self.selected_word,
            "detailed_meaning": self.detailed_meaning,
        }


def create_client(provider=None, store=None) -> FlashcardClient:
    """Build a client with the configured provider and store, history loaded."""
    client = FlashcardClient(
        provider=provider or get_meaning_provider(),
        store=store or get_history_store(),
    )
    client.load_history()
    return client
