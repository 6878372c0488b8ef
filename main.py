"""CLI entrypoint for generating vocabulary game puzzles."""

from __future__ import annotations

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from vocabgames.core.constants import Level
from vocabgames.core.exceptions import DictionaryLoadError
from vocabgames.core.models import GenerationResult
from vocabgames.data.word_bank import DEFAULT_VOCABULARY_PATH, WordBank, WordBankConfig
from vocabgames.engine.anagram import scramble, tiles_text
from vocabgames.engine.crossword import CrosswordBuilder, CrosswordConfig
from vocabgames.engine.spelling_bee import SpellingBeeConfig, SpellingBeeGenerator
from vocabgames.engine.word_search import WordSearchConfig, WordSearchGenerator
from vocabgames.utils.logger import configure_logging, get_logger
from vocabgames.utils.pretty import format_clues, format_honeycomb, format_word_list, pretty_print_grid


LOGGER = get_logger(__name__)

MODES = ("word-search", "crossword", "anagram", "spelling-bee", "word-guess")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate vocabulary game puzzles from a leveled word list",
    )
    parser.add_argument("--mode", type=str, choices=MODES, required=True, help="Game mode")
    parser.add_argument(
        "--level",
        type=str,
        choices=[level.value for level in Level],
        default=Level.A1.value,
        help="CEFR level to draw words from",
    )
    parser.add_argument(
        "--vocabulary",
        type=Path,
        default=DEFAULT_VOCABULARY_PATH,
        help="Path to the leveled vocabulary JSON",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--grid-size",
        type=int,
        default=None,
        help="Override the grid size (word-search and crossword only)",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--show-grid",
        action="store_true",
        help="Also pretty-print the puzzle to stderr",
    )
    return parser


def generate_puzzle(args: argparse.Namespace, bank: WordBank) -> GenerationResult:
    rng = random.Random(args.seed)
    level = args.level

    if args.mode == "word-search":
        config = WordSearchConfig(seed=args.seed)
        if args.grid_size:
            config.grid_size = args.grid_size
        words = bank.get_random_words(level, config.word_count)
        return WordSearchGenerator(config, rng=rng).generate(words)

    if args.mode == "crossword":
        config = CrosswordConfig(seed=args.seed)
        if args.grid_size:
            config.grid_size = args.grid_size
        words = bank.get_random_words(level, config.word_count)
        return CrosswordBuilder(config, rng=rng).generate(words)

    if args.mode == "spelling-bee":
        config = SpellingBeeConfig(seed=args.seed)
        return SpellingBeeGenerator(config, rng=rng).generate(bank.get_words_by_level(level))

    word = bank.get_random_word(level)
    if word is None:
        return GenerationResult.failure(f"No words for level {level}")
    if args.mode == "anagram":
        return GenerationResult.success({"word": word, "tiles": scramble(word.text, rng)})
    return GenerationResult.success({"word": word})


def to_payload(mode: str, result: GenerationResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"mode": mode, "ok": result.ok, "dropped_words": result.dropped_words}
    if not result.ok:
        payload["error"] = result.error
        return payload

    puzzle = result.puzzle
    if mode == "anagram":
        payload["word"] = puzzle["word"].to_dict()
        payload["scrambled"] = tiles_text(puzzle["tiles"])
        payload["tiles"] = [
            {"id": tile.id, "letter": tile.letter, "original_index": tile.original_index}
            for tile in puzzle["tiles"]
        ]
    elif mode == "word-guess":
        word = puzzle["word"]
        payload["length"] = len(word.text)
        payload["word"] = word.to_dict()
    else:
        payload["puzzle"] = puzzle.to_jsonable()
    return payload


def show(mode: str, result: GenerationResult, stream=None) -> None:
    stream = stream or sys.stderr
    if not result.ok:
        return
    puzzle = result.puzzle
    if mode == "word-search":
        pretty_print_grid(puzzle.grid, label="Word search", stream=stream)
        print(format_word_list(puzzle.placements), file=stream)
    elif mode == "crossword":
        pretty_print_grid(puzzle.grid, label="Crossword", stream=stream)
        print(format_clues(puzzle), file=stream)
    elif mode == "spelling-bee":
        print(format_honeycomb(puzzle), file=stream)
    elif mode == "anagram":
        print(f"Scrambled: {tiles_text(puzzle['tiles'])}", file=stream)
    else:
        print(f"Guess a {len(puzzle['word'].text)}-letter word", file=stream)


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.grid_size is not None and args.grid_size < 2:
        parser.error("--grid-size must be at least 2")

    try:
        bank = WordBank(WordBankConfig(path=args.vocabulary, seed=args.seed))
    except DictionaryLoadError as exc:
        LOGGER.error("%s", exc)
        return 2

    result = generate_puzzle(args, bank)
    if args.show_grid:
        show(args.mode, result)

    output_text = json.dumps(to_payload(args.mode, result), ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0 if result.ok else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
