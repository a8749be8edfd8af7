"""Beam scorers for CTC beam search.

A scorer keeps auxiliary state per beam and turns it into additional
log-probability for the beam. The decoder calls

    initialize_state(root)                          once per root beam
    expand_state(parent, label, child, new_label)   once per child per step
    get_state_expansion_score(child, score)         any number of times
    expand_state_end(state)                         once per beam at the end
    get_state_end_expansion_score(state)            any number of times

expand_state and expand_state_end do the work and cache the result in the
state; the get_* methods only read the cache.
"""

import logging
import math
from pathlib import Path
from typing import Generic, Optional, Type, TypeVar, Union

from beamscorer.beam_search.hypothesis import EmptyBeamState, KenLMBeamState, PrefixBeamState
from beamscorer.beam_search.labels import LabelToCharacterTranslator
from beamscorer.beam_search.trie import TrieNode, load_trie
from beamscorer.config import ScorerConfig
from beamscorer.lm.language_model import KenLMLanguageModel, LanguageModel

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")


class BaseBeamScorer(Generic[StateT]):
    """Scorer interface with the plain CTC behavior (no state, no extra score).

    Subclasses set state_type and override the methods they need.
    """

    state_type: Type = EmptyBeamState

    def new_state(self) -> StateT:
        """Allocate an uninitialized state of this scorer's state type."""
        return self.state_type()

    def initialize_state(self, root: StateT) -> None:
        """Set up the state of a root beam."""
        pass

    def expand_state(self, from_state: StateT, from_label: int, to_state: StateT, to_label: int) -> None:
        """Write the state of the child beam reached by to_label into to_state.

        from_state is never modified.
        """
        pass

    def expand_state_end(self, state: StateT) -> None:
        """Final scoring of a beam after decoding has finished."""
        pass

    def get_state_expansion_score(self, state: StateT, previous_score: float) -> float:
        """Cached expansion score combined with previous_score (log-probabilities)."""
        return previous_score

    def get_state_end_expansion_score(self, state: StateT) -> float:
        """Cached score computed by expand_state_end."""
        return 0.0


class PrefixScorer(BaseBeamScorer[PrefixBeamState]):
    """Penalizes beams whose current word is not a prefix of any vocabulary word.

    The penalty is applied once per word, at the label that leaves the trie.

    Args:
        trie_root: Root of the vocabulary trie
        config: Scorer configuration (prefix_penalty)
    """

    state_type = PrefixBeamState

    def __init__(self, trie_root: TrieNode, config: Optional[ScorerConfig] = None):
        self.config = config or ScorerConfig()
        self.trie_root = trie_root
        self.translator = LabelToCharacterTranslator()

    @classmethod
    def from_file(cls, trie_path: Union[str, Path], config: Optional[ScorerConfig] = None) -> "PrefixScorer":
        return cls(load_trie(trie_path), config)

    def initialize_state(self, root: PrefixBeamState) -> None:
        root.prob = 0.0
        root.node = self.trie_root

    def expand_state(
        self,
        from_state: PrefixBeamState,
        from_label: int,
        to_state: PrefixBeamState,
        to_label: int,
    ) -> None:
        to_state.copy_from(from_state)

        if from_label == to_label or self.translator.is_blank_label(to_label):
            return

        if self.translator.is_space_label(to_label):
            to_state.node = self.trie_root
            return

        if to_state.node is None:
            # Penalty already applied for this word
            return

        to_state.node = to_state.node.get_child_at(to_label)
        if to_state.node is None:
            to_state.prob -= self.config.prefix_penalty

    def expand_state_end(self, state: PrefixBeamState) -> None:
        pass

    def get_state_expansion_score(self, state: PrefixBeamState, previous_score: float) -> float:
        return state.prob

    def get_state_end_expansion_score(self, state: PrefixBeamState) -> float:
        return state.prob


class KenLMBeamScorer(BaseBeamScorer[KenLMBeamState]):
    """Language model scorer combining trie prefix estimates with n-gram scores.

    Inside a word the beam is scored by the log10 relative frequency of the
    word's prefix in the trie, added to the last language model score. At
    every word boundary (a separator, even one with no pending word) the
    estimate is replaced by the language model's score for the completed
    word. At the end of decoding it is replaced by the end-of-sentence score.

    Args:
        language_model: Word-level language model backend
        trie_root: Root of the vocabulary trie
        config: Scorer configuration (missing_prefix_log_prob)
    """

    state_type = KenLMBeamState

    def __init__(
        self,
        language_model: LanguageModel,
        trie_root: TrieNode,
        config: Optional[ScorerConfig] = None,
    ):
        self.config = config or ScorerConfig()
        self.language_model = language_model
        self.trie_root = trie_root
        self.translator = LabelToCharacterTranslator()

    @classmethod
    def from_files(
        cls,
        model_path: Union[str, Path],
        trie_path: Optional[Union[str, Path]] = None,
        config: Optional[ScorerConfig] = None,
    ) -> "KenLMBeamScorer":
        """Load a KenLM model and its trie.

        Args:
            model_path: Path to the KenLM model
            trie_path: Path to the trie, defaults to model_path + config.trie_suffix
            config: Scorer configuration

        Raises:
            FileNotFoundError: if the model or trie is missing
            TrieFormatError: if the trie is malformed
        """
        config = config or ScorerConfig()
        if trie_path is None:
            trie_path = str(model_path) + config.trie_suffix
        language_model = KenLMLanguageModel(model_path)
        trie_root = load_trie(trie_path)
        return cls(language_model, trie_root, config)

    def initialize_state(self, root: KenLMBeamState) -> None:
        root.language_model_score = 0.0
        root.score = 0.0
        root.delta_score = 0.0
        root.incomplete_word = ""
        root.incomplete_word_trie_node = self.trie_root
        root.model_state = self.language_model.begin_sentence_state()

    def expand_state(
        self,
        from_state: KenLMBeamState,
        from_label: int,
        to_state: KenLMBeamState,
        to_label: int,
    ) -> None:
        to_state.copy_from(from_state)

        if from_label == to_label or self.translator.is_blank_label(to_label):
            to_state.delta_score = 0.0
            return

        if not self.translator.is_space_label(to_label):
            to_state.incomplete_word += self.translator.get_character_from_label(to_label)
            trie_node = from_state.incomplete_word_trie_node

            prefix_prob = self.config.missing_prefix_log_prob
            if trie_node is not None:
                trie_node = trie_node.get_child_at(to_label)
                to_state.incomplete_word_trie_node = trie_node

                if trie_node is not None:
                    prefix_prob = math.log10(trie_node.get_frequency() / self.trie_root.get_frequency())

            to_state.score = prefix_prob + to_state.language_model_score
            to_state.delta_score = to_state.score - from_state.score
            return

        word_score, to_state.model_state = self._score_incomplete_word(
            from_state.model_state, to_state.incomplete_word
        )
        self._update_with_lm_score(to_state, word_score)
        self._reset_incomplete_word(to_state)

    def expand_state_end(self, state: KenLMBeamState) -> None:
        score_before = state.score

        if state.incomplete_word:
            # Only the context is kept, the end-of-sentence score replaces the word score
            _, state.model_state = self._score_incomplete_word(state.model_state, state.incomplete_word)
            self._reset_incomplete_word(state)

        end_score, state.model_state = self.language_model.full_score(
            state.model_state, self.language_model.end_sentence()
        )
        logger.debug(f"End of sentence log10 prob: {end_score:.4f}")
        self._update_with_lm_score(state, end_score)
        state.delta_score = state.score - score_before

    def get_state_expansion_score(self, state: KenLMBeamState, previous_score: float) -> float:
        return state.delta_score + previous_score

    def get_state_end_expansion_score(self, state: KenLMBeamState) -> float:
        return state.delta_score

    def _update_with_lm_score(self, state: KenLMBeamState, lm_score: float) -> None:
        previous_score = state.score
        state.language_model_score = lm_score
        state.score = lm_score
        state.delta_score = lm_score - previous_score

    def _reset_incomplete_word(self, state: KenLMBeamState) -> None:
        state.incomplete_word = ""
        state.incomplete_word_trie_node = self.trie_root

    def _score_incomplete_word(self, model_state, word: str):
        token = self.language_model.index(word)
        log_prob, out = self.language_model.full_score(model_state, token)
        logger.debug(f"Word {word!r}: log10 prob {log_prob:.4f}")
        return log_prob, out
