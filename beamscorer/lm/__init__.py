"""Language model backends."""

from beamscorer.lm.language_model import KenLMLanguageModel, LanguageModel

__all__ = [
    "KenLMLanguageModel",
    "LanguageModel",
]
