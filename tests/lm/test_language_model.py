"""Tests for the KenLM language model adapter."""

import sys
import os

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from beamscorer.lm import KenLMLanguageModel, LanguageModel

kenlm = pytest.importorskip("kenlm")

ARPA = """\\data\\
ngram 1=5
ngram 2=3

\\1-grams:
-1.0\t<unk>\t0
-99\t<s>\t-0.3
-0.5\t</s>\t0
-0.3\tthe\t-0.2
-0.6\tcat\t-0.2

\\2-grams:
-0.1\t<s> the
-0.05\tthe cat
-0.2\tcat </s>

\\end\\
"""


@pytest.fixture
def model(tmp_path):
    path = tmp_path / "tiny.arpa"
    path.write_text(ARPA)
    return KenLMLanguageModel(path)


def test_is_language_model(model):
    assert isinstance(model, LanguageModel)
    assert model.model.order == 2


def test_sentence_scores(model):
    state = model.begin_sentence_state()

    log_prob, state = model.full_score(state, model.index("the"))
    assert np.isclose(log_prob, -0.1, atol=1e-5)

    log_prob, state = model.full_score(state, model.index("cat"))
    assert np.isclose(log_prob, -0.05, atol=1e-5)

    log_prob, _ = model.full_score(state, model.end_sentence())
    assert np.isclose(log_prob, -0.2, atol=1e-5)


def test_context_is_not_modified(model):
    begin = model.begin_sentence_state()
    first, after_the = model.full_score(begin, "the")
    second, _ = model.full_score(begin, "the")

    assert first == second
    assert after_the != begin


def test_unknown_word(model):
    begin = model.begin_sentence_state()
    log_prob, _ = model.full_score(begin, model.index("zebra"))

    # Backoff of <s> plus the <unk> unigram
    assert np.isclose(log_prob, -0.3 + -1.0, atol=1e-5)


def test_missing_model(tmp_path):
    with pytest.raises(FileNotFoundError):
        KenLMLanguageModel(tmp_path / "missing.arpa")
