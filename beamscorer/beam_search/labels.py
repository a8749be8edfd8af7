"""Label to character mapping for the character-level CTC alphabet.

Labels 0-25 are the letters a-z, 26 is the apostrophe, 27 is the word
separator (space) and 28 is the CTC blank.
"""

from typing import List

APOSTROPHE_LABEL = 26
SPACE_LABEL = 27
BLANK_LABEL = 28

# Letters plus apostrophe; the fan-out of every trie node
TRIE_ALPHABET_SIZE = 27
NUM_LABELS = 29


class LabelToCharacterTranslator:
    """Stateless classification of label ids."""

    def is_blank_label(self, label: int) -> bool:
        return label == BLANK_LABEL

    def is_space_label(self, label: int) -> bool:
        return label == SPACE_LABEL

    def get_character_from_label(self, label: int) -> str:
        if label == APOSTROPHE_LABEL:
            return "'"
        if label == SPACE_LABEL:
            return " "
        return chr(label + ord("a"))

    def get_label_from_character(self, ch: str) -> int:
        """Inverse of get_character_from_label.

        Raises:
            ValueError: if ch is not part of the alphabet
        """
        if ch == "'":
            return APOSTROPHE_LABEL
        if ch == " ":
            return SPACE_LABEL
        if len(ch) == 1 and "a" <= ch <= "z":
            return ord(ch) - ord("a")
        raise ValueError(f"Character {ch!r} is not in the alphabet")

    def labels_from_text(self, text: str) -> List[int]:
        """Convert text to labels, one per character (no blanks inserted)."""
        return [self.get_label_from_character(ch) for ch in text]
