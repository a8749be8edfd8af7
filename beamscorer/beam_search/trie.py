"""Prefix trie over the character alphabet, with per-prefix frequencies.

The on-disk format is plain text: whitespace separated integers written in
pre-order. Each node is its frequency followed by its children in label
order, an absent child is written as -1.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, TextIO, Tuple, Union

from beamscorer.beam_search.labels import TRIE_ALPHABET_SIZE, LabelToCharacterTranslator

logger = logging.getLogger(__name__)

ABSENT_NODE = -1


class TrieFormatError(ValueError):
    """Raised when a serialized trie cannot be parsed."""


class TrieNode:
    """A single node of the trie.

    Attributes:
        children: Child nodes indexed by label, None where absent
        frequency: Total count of all words having this node's prefix
    """

    __slots__ = ("children", "frequency")

    def __init__(self, frequency: int = 0):
        self.children: List[Optional["TrieNode"]] = [None] * TRIE_ALPHABET_SIZE
        self.frequency = frequency

    def get_child_at(self, label: int) -> Optional["TrieNode"]:
        if 0 <= label < TRIE_ALPHABET_SIZE:
            return self.children[label]
        return None

    def get_frequency(self) -> int:
        return self.frequency

    def insert(self, labels: Iterable[int], count: int = 1) -> None:
        """Add a word given as labels, incrementing every node on its path."""
        node = self
        node.frequency += count
        for label in labels:
            child = node.children[label]
            if child is None:
                child = TrieNode()
                node.children[label] = child
            child.frequency += count
            node = child

    def num_nodes(self) -> int:
        count = 0
        stack = [self]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(c for c in node.children if c is not None)
        return count

    def write_to_stream(self, out: TextIO) -> None:
        """Serialize this subtree in pre-order, one integer per line."""
        # Explicit stack, children pushed in reverse to keep label order
        stack: List[Optional[TrieNode]] = [self]
        while stack:
            node = stack.pop()
            if node is None:
                out.write(f"{ABSENT_NODE}\n")
                continue
            out.write(f"{node.frequency}\n")
            stack.extend(reversed(node.children))

    @classmethod
    def read_from_stream(cls, stream: TextIO) -> "TrieNode":
        """Deserialize a trie written by write_to_stream.

        Raises:
            TrieFormatError: on truncated, non-numeric or trailing data
        """
        tokens = _iter_tokens(stream)
        root = _read_node(tokens)
        if root is None:
            raise TrieFormatError("Trie root must not be absent")
        extra = next(tokens, None)
        if extra is not None:
            raise TrieFormatError(f"Unexpected trailing data after trie: {extra!r}")
        return root

    def __repr__(self) -> str:
        n_children = sum(c is not None for c in self.children)
        return f"TrieNode(frequency={self.frequency}, children={n_children})"


def _iter_tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _parse_frequency(tokens: Iterator[str]) -> int:
    try:
        token = next(tokens)
    except StopIteration:
        raise TrieFormatError("Unexpected end of trie data") from None
    try:
        value = int(token)
    except ValueError:
        raise TrieFormatError(f"Invalid trie token: {token!r}") from None
    if value < ABSENT_NODE:
        raise TrieFormatError(f"Invalid trie frequency: {value}")
    return value


def _read_node(tokens: Iterator[str]) -> Optional[TrieNode]:
    frequency = _parse_frequency(tokens)
    if frequency == ABSENT_NODE:
        return None
    root = TrieNode(frequency)
    # (node, next child index) pairs; iterative so deep tries cannot hit the recursion limit
    stack: List[Tuple[TrieNode, int]] = [(root, 0)]
    while stack:
        node, index = stack.pop()
        if index == TRIE_ALPHABET_SIZE:
            continue
        stack.append((node, index + 1))
        frequency = _parse_frequency(tokens)
        if frequency == ABSENT_NODE:
            continue
        if frequency == 0 or frequency > node.frequency:
            raise TrieFormatError(f"Child frequency {frequency} must be between 1 and its parent's {node.frequency}")
        child = TrieNode(frequency)
        node.children[index] = child
        stack.append((child, 0))
    return root


def build_trie(word_counts: Mapping[str, int]) -> TrieNode:
    """Build a trie from a {word: count} mapping.

    Args:
        word_counts: Words made of alphabet characters (a-z and apostrophe)

    Returns:
        Root node, whose frequency is the sum of all counts

    Raises:
        ValueError: if a word contains a character outside the alphabet or a count is not positive
    """
    translator = LabelToCharacterTranslator()
    root = TrieNode()
    for word, count in word_counts.items():
        if not word or " " in word:
            raise ValueError(f"Invalid vocabulary word: {word!r}")
        if count <= 0:
            raise ValueError(f"Count of {word!r} must be positive, got {count}")
        root.insert(translator.labels_from_text(word), count)
    return root


def save_trie(root: TrieNode, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        root.write_to_stream(f)
    logger.info(f"Wrote trie with {root.num_nodes()} nodes to {path}")


def load_trie(path: Union[str, Path]) -> TrieNode:
    """Load a serialized trie from disk.

    Raises:
        FileNotFoundError: if path does not exist
        TrieFormatError: if the file is malformed
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            root = TrieNode.read_from_stream(f)
    except FileNotFoundError:
        logger.error(f"Trie file '{path}' not found.")
        raise
    except TrieFormatError as e:
        logger.error(f"Malformed trie file '{path}': {e}")
        raise
    logger.info(f"Loaded trie from {path}: {root.num_nodes()} nodes, root frequency {root.frequency}")
    return root
