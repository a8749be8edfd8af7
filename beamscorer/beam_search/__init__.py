"""Beam scorers for CTC beam search decoding."""

from beamscorer.beam_search.hypothesis import (
    EmptyBeamState,
    KenLMBeamState,
    PrefixBeamState,
)
from beamscorer.beam_search.labels import LabelToCharacterTranslator
from beamscorer.beam_search.replay import replay_labels
from beamscorer.beam_search.scorers import (
    BaseBeamScorer,
    KenLMBeamScorer,
    PrefixScorer,
)
from beamscorer.beam_search.trie import (
    TrieFormatError,
    TrieNode,
    build_trie,
    load_trie,
    save_trie,
)

__all__ = [
    "EmptyBeamState",
    "KenLMBeamState",
    "PrefixBeamState",
    "LabelToCharacterTranslator",
    "replay_labels",
    "BaseBeamScorer",
    "KenLMBeamScorer",
    "PrefixScorer",
    "TrieFormatError",
    "TrieNode",
    "build_trie",
    "load_trie",
    "save_trie",
]
