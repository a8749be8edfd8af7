"""Language model backends used by the KenLM beam scorer."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Hashable, Tuple, Union

logger = logging.getLogger(__name__)


class LanguageModel(ABC):
    """Word-level n-gram language model interface.

    Contexts are opaque to callers. full_score must never modify the context
    it is given, so beams can share a parent's context safely.
    """

    @abstractmethod
    def begin_sentence_state(self) -> Any:
        """Return the context at the start of a sentence."""
        pass

    @abstractmethod
    def index(self, word: str) -> Hashable:
        """Look up the vocabulary token for word.

        Unknown words map to the backend's unknown token; this never fails.
        """
        pass

    @abstractmethod
    def end_sentence(self) -> Hashable:
        """Return the end-of-sentence token."""
        pass

    @abstractmethod
    def full_score(self, context: Any, token: Hashable) -> Tuple[float, Any]:
        """Score token given context.

        Args:
            context: Context returned by begin_sentence_state or a previous call
            token: Token from index() or end_sentence()

        Returns:
            Tuple of (log10_prob, new_context)
        """
        pass


class KenLMLanguageModel(LanguageModel):
    """KenLM n-gram model (ARPA or binary).

    The kenlm Python bindings address the vocabulary by word string, so
    tokens are the words themselves.

    Args:
        model_path: Path to the .arpa or .binary KenLM model
    """

    END_SENTENCE = "</s>"

    def __init__(self, model_path: Union[str, Path]):
        import kenlm

        self._kenlm = kenlm
        model_path = Path(model_path)
        if not model_path.exists():
            logger.error(f"KenLM model '{model_path}' not found.")
            raise FileNotFoundError(str(model_path))
        try:
            self.model = kenlm.Model(str(model_path))
        except Exception as e:
            logger.error(f"Error loading KenLM model '{model_path}': {e}")
            raise
        logger.info(f"Loaded {self.model.order}-gram KenLM model from {model_path}")

    def begin_sentence_state(self) -> Any:
        state = self._kenlm.State()
        self.model.BeginSentenceWrite(state)
        return state

    def index(self, word: str) -> str:
        return word

    def end_sentence(self) -> str:
        return self.END_SENTENCE

    def full_score(self, context: Any, token: str) -> Tuple[float, Any]:
        out = self._kenlm.State()
        log_prob = self.model.BaseScore(context, token, out)
        return log_prob, out
