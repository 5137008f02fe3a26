"""
FlashcardsModule
----------------
This module holds the word cards looked up by the user, the persisted word
history, and the client state that drives the flashcard screen.
"""

from .word_card import WordCard
from .history import (
    HISTORY_KEY,
    HistoryDeserializationError,
    load_history,
    save_history,
)
from .flashcards import FlashcardClient, create_client
