from dataclasses import dataclass


@dataclass(frozen=True)
class WordCard:
    """
    A word paired with its explanatory text.
    """

    word: str
    meaning: str

    @property
    def key(self) -> str:
        """Lookup key, words are compared case-insensitively."""
        return self.word.lower()

    def to_dict(self):
        return {"word": self.word, "meaning": self.meaning}

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise TypeError(f"Expected an object, got {type(data).__name__}")
        word, meaning = data.get("word"), data.get("meaning")
        if not isinstance(word, str) or not isinstance(meaning, str):
            raise TypeError("Word card needs string 'word' and 'meaning' fields")
        return WordCard(word=word, meaning=meaning)


def contains_word(cards, word: str) -> bool:
    """Return True if ``cards`` already hold ``word`` in any letter case."""
    key = word.lower()
    return any(card.key == key for card in cards)
