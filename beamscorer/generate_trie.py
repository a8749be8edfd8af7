# Build the vocabulary trie used by the beam scorers. The vocabulary file has one word per
# line, optionally followed by a count ("word 12"). The trie is written next to the KenLM
# model as <model><trie_suffix> when --model is given.

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Dict, Union

from beamscorer.beam_search.labels import LabelToCharacterTranslator
from beamscorer.beam_search.trie import build_trie, save_trie
from beamscorer.config import ScorerConfig, load_config

logger = logging.getLogger(__name__)


def read_vocabulary(vocab_path: Union[str, Path]) -> Dict[str, int]:
    """Read word counts from a vocabulary file.

    Words are lower-cased. Entries with characters outside the alphabet or a
    malformed count are skipped with a warning. Repeated words are summed.
    """
    translator = LabelToCharacterTranslator()
    counts: Counter = Counter()
    with open(vocab_path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            parts = line.split()
            if not parts:
                continue
            word = parts[0].lower()
            count = 1
            if len(parts) > 1:
                try:
                    count = int(parts[1])
                except ValueError:
                    logger.warning(f"{vocab_path}:{line_no}: invalid count {parts[1]!r}, skipping")
                    continue
                if count <= 0:
                    logger.warning(f"{vocab_path}:{line_no}: count {count} is not positive, skipping")
                    continue
            try:
                translator.labels_from_text(word)
            except ValueError:
                logger.warning(f"{vocab_path}:{line_no}: {word!r} has characters outside the alphabet, skipping")
                continue
            counts[word] += count
    logger.info(f"Read {len(counts)} words from {vocab_path}")
    return dict(counts)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Build the prefix trie used by the beamscorer prefix and KenLM scorers.')
    parser.add_argument('vocab', help='Vocabulary file, one word (optionally followed by a count) per line')
    parser.add_argument('output', nargs='?', default='',
                        help='Output trie file. Defaults to <model><trie_suffix> if --model is given.')
    parser.add_argument('-m', '--model', dest='model', default='',
                        help='KenLM model the trie belongs to', type=str)
    parser.add_argument('-c', '--config', dest='config', default='',
                        help='YAML scorer config (for trie_suffix)', type=str)
    parser.add_argument('--log-level', dest='log_level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level (default: INFO)', type=str)

    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))

    config = load_config(args.config) if args.config else ScorerConfig()

    output = args.output
    if not output:
        if not args.model:
            parser.error('either an output path or --model is required')
        output = args.model + config.trie_suffix

    try:
        counts = read_vocabulary(args.vocab)
    except OSError as e:
        logger.error(f"Could not read vocabulary '{args.vocab}': {e}")
        return 1

    if not counts:
        logger.error(f"No usable words in '{args.vocab}'")
        return 1

    save_trie(build_trie(counts), output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
