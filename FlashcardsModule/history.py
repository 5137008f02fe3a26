"""Serialization of the word history into a key-value store."""
from __future__ import annotations

import json
import logging
from typing import List

from .word_card import WordCard

HISTORY_KEY = "wordHistory"

logger = logging.getLogger(__name__)


class HistoryDeserializationError(ValueError):
    """The persisted history could not be turned back into word cards."""


def load_history(store) -> List[WordCard]:
    """
    Read the persisted history from ``store``.

    Returns an empty list when nothing has been stored yet.  Later entries
    repeating an earlier word (in any letter case) are dropped.
    """
    try:
        raw = store.get_item(HISTORY_KEY)
    except ValueError as exc:
        raise HistoryDeserializationError(f"History store unreadable: {exc}") from exc
    if raw is None:
        return []

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise HistoryDeserializationError(f"History is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise HistoryDeserializationError("History must be a JSON array")

    history: List[WordCard] = []
    seen = set()
    for entry in data:
        try:
            card = WordCard.from_dict(entry)
        except TypeError as exc:
            raise HistoryDeserializationError(str(exc)) from exc
        if card.key in seen:
            logger.debug("Skipping duplicate history entry %r", card.word)
            continue
        seen.add(card.key)
        history.append(card)
    return history


def save_history(store, cards: List[WordCard]) -> None:
    store.set_item(
        HISTORY_KEY,
        json.dumps([card.to_dict() for card in cards], ensure_ascii=False),
    )
