"""Per-beam scorer state classes."""

import copy
from dataclasses import dataclass
from typing import Any, Optional

from beamscorer.beam_search.trie import TrieNode


@dataclass
class EmptyBeamState:
    """State for scorers that keep no per-beam information."""

    def copy_from(self, other: "EmptyBeamState") -> None:
        pass


@dataclass
class PrefixBeamState:
    """Beam state of the PrefixScorer.

    Attributes:
        prob: Accumulated penalty (log-probability, <= 0)
        node: Cursor into the trie, None once the current word left the trie
    """

    prob: float = 0.0
    node: Optional[TrieNode] = None

    def copy_from(self, other: "PrefixBeamState") -> None:
        self.prob = other.prob
        self.node = other.node

    def __repr__(self) -> str:
        return f"PrefixBeamState(prob={self.prob:.2f}, has_prefix={self.node is not None})"


@dataclass
class KenLMBeamState:
    """Beam state of the KenLMBeamScorer.

    Attributes:
        score: Current total log10 score (LM score plus prefix estimate)
        language_model_score: Sentence log10 probability at the last word boundary
        delta_score: Contribution of the most recent expansion
        incomplete_word: Characters since the last word boundary
        incomplete_word_trie_node: Trie cursor for incomplete_word, None if no prefix matches
        model_state: Language model context after the last completed word
    """

    score: float = 0.0
    language_model_score: float = 0.0
    delta_score: float = 0.0
    incomplete_word: str = ""
    incomplete_word_trie_node: Optional[TrieNode] = None
    model_state: Any = None

    def copy_from(self, other: "KenLMBeamState") -> None:
        self.score = other.score
        self.language_model_score = other.language_model_score
        self.delta_score = other.delta_score
        self.incomplete_word = other.incomplete_word
        # Cursor is shared, never copied; the trie belongs to the scorer
        self.incomplete_word_trie_node = other.incomplete_word_trie_node
        self.model_state = copy.copy(other.model_state)

    def __repr__(self) -> str:
        return (
            f"KenLMBeamState(score={self.score:.2f}, "
            f"language_model_score={self.language_model_score:.2f}, "
            f"delta_score={self.delta_score:.2f}, "
            f"incomplete_word={self.incomplete_word!r})"
        )
