"""Run a single label sequence through a scorer."""

from typing import Any, Iterable, Tuple

from beamscorer.beam_search.labels import BLANK_LABEL
from beamscorer.beam_search.scorers import BaseBeamScorer


def replay_labels(
    scorer: BaseBeamScorer,
    labels: Iterable[int],
    initial_score: float = 0.0,
    finalize: bool = True,
) -> Tuple[Any, float]:
    """Expand one beam through labels, calling the scorer like a decoder would.

    Every step allocates a new child state, so intermediate states are left
    untouched. The root is treated as if it ended in a blank.

    Args:
        scorer: Beam scorer
        labels: Label sequence, one label per step
        initial_score: Score of the root beam
        finalize: Whether to run expand_state_end at the end

    Returns:
        Tuple of (final_state, total_score)
    """
    state = scorer.new_state()
    scorer.initialize_state(state)
    total = initial_score
    from_label = BLANK_LABEL

    for label in labels:
        label = int(label)
        child = scorer.new_state()
        scorer.expand_state(state, from_label, child, label)
        total = scorer.get_state_expansion_score(child, total)
        state, from_label = child, label

    if finalize:
        scorer.expand_state_end(state)
        total += scorer.get_state_end_expansion_score(state)

    return state, total
