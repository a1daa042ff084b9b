"""Command-line interface for wordgroup.

WHY: The usual way to get analyzer output is to pipe text through MeCab,
so the merge should be one more command in that pipeline. The CLI wires
together the full flow (token adapter, merge engine, sentence batching,
pluggable formatter output) behind a single command.

HOW: Uses argparse to accept an input file (or "-" for stdin), the input
format, optional original text for whitespace realignment, the merge
switches and an output format. MeCab input without --text is merged one
EOS sentence at a time across a thread pool. The result goes to stdout,
or to a file next to the input (or in --output-dir) with --save.

RULES:
- Positional argument: analyzer output path, or "-" for stdin
- --input-format defaults to "json" for *.json files, "mecab" otherwise
- --text only applies to mecab input
- Merge switch defaults come from the environment (see config.py)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-words-2.txt)
- Status output goes to stderr, results to stdout
- Any WordgroupError or bad configuration exits with status 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from wordgroup import __version__
from wordgroup.adapters.token_adapter import (
    documents_from_mecab,
    tokens_from_mecab,
    tokens_from_records,
)
from wordgroup.config import MergeConfig, load_config, load_log_level
from wordgroup.core.errors import AdapterError, WordgroupError
from wordgroup.core.ir import Token, Word
from wordgroup.core.profiles import PROFILES, get_profile
from wordgroup.core.rules import get_rule_table
from wordgroup.core.stream import WordStream, merge_many, split_sentences
from wordgroup.formatters import DEFAULT_FORMAT, FORMATTERS
from wordgroup.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("mecab", "json")


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. novel-words.txt)
    - Conflict: insert a counter before the extension (novel-words-2.txt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    input_path = Path(path)
    if not input_path.is_file():
        raise AdapterError("File not found: {}".format(input_path))
    return input_path.read_text(encoding="utf-8")


def _detect_input_format(path: str, explicit: Optional[str]) -> str:
    if explicit:
        return explicit
    return "json" if path.lower().endswith(".json") else "mecab"


def _merge_json(raw: str, config: MergeConfig) -> List[List[Word]]:
    """Merge JSON token records: one list of records, or a list of lists."""
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise AdapterError("Input is not valid JSON: {}".format(exc)) from exc

    profile = get_profile(config.rule_profile)
    if isinstance(data, list) and data and all(isinstance(item, list) for item in data):
        documents = [tokens_from_records(item, profile) for item in data]
        return [
            sentence
            for words in merge_many(documents, config)
            for sentence in split_sentences(words, profile)
        ]
    return list(WordStream(tokens_from_records(data, profile), config).sentences())


def _merge_mecab(
    raw: str,
    config: MergeConfig,
    text: Optional[str],
    workers: Optional[int],
) -> List[List[Word]]:
    profile = get_profile(config.rule_profile)
    lines = raw.splitlines()
    if text is not None:
        tokens: List[Token] = tokens_from_mecab(lines, profile, text=text)
        return list(WordStream(tokens, config).sentences())

    documents = documents_from_mecab(lines, profile)
    _status("Merging {} sentence(s)...".format(len(documents)))
    return [
        sentence
        for words in merge_many(documents, config, max_workers=workers)
        for sentence in split_sentences(words, profile)
    ]


def run(args: argparse.Namespace) -> List[FormatterOutput]:
    """Execute the adapt, merge and format steps for parsed arguments."""
    defaults = load_config()
    config = MergeConfig(
        rule_profile=args.profile or defaults.rule_profile,
        absorb_symbols=(
            defaults.absorb_symbols if args.absorb_symbols is None else args.absorb_symbols
        ),
        merge_compounds=(
            defaults.merge_compounds if args.merge_compounds is None else args.merge_compounds
        ),
    )
    logger.info("Merge config: %s", config)

    if args.list_rules:
        rows = [
            "{}\t{}\t{}".format(tier, name, decision)
            for tier, name, decision in get_rule_table(config).describe()
        ]
        return [FormatterOutput(suffix="-rules.tsv", content="\n".join(rows) + "\n",
                                media_type="text/tab-separated-values")]

    if args.input is None:
        raise AdapterError("An input file is required (use '-' for stdin)")

    raw = _read_input(args.input)
    input_format = _detect_input_format(args.input, args.input_format)

    if input_format == "json":
        if args.text:
            _status("Note: --text is ignored for json input")
        sentences = _merge_json(raw, config)
    else:
        text = Path(args.text).read_text(encoding="utf-8") if args.text else None
        sentences = _merge_mecab(raw, config, text, args.workers)

    word_count = sum(len(sentence) for sentence in sentences)
    _status("Merged {} word(s) in {} sentence(s)".format(word_count, len(sentences)))

    formatter = FORMATTERS[args.format]()
    return formatter.format(sentences)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="wordgroup",
        description="Merge Japanese analyzer tokens (MeCab IPADIC/UniDic) into words.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="MeCab output or JSON token records ('-' reads stdin)",
    )
    parser.add_argument(
        "--input-format",
        choices=INPUT_FORMATS,
        default=None,
        help="Input format (default: json for *.json files, mecab otherwise)",
    )
    parser.add_argument(
        "--text",
        default=None,
        help="Original text file; restores whitespace the analyzer skipped",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="Dictionary tag scheme (default: WORDGROUP_RULE_PROFILE or ipadic)",
    )
    parser.add_argument(
        "--absorb-symbols",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Fold brackets into the word they enclose (default: on)",
    )
    parser.add_argument(
        "--merge-compounds",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Join compound nouns, prefixes and suffixes (default: on)",
    )
    parser.add_argument(
        "--format",
        choices=sorted(FORMATTERS),
        default=DEFAULT_FORMAT,
        help="Output format (default: {})".format(DEFAULT_FORMAT),
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write the result to {stem}{suffix} instead of stdout",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for --save (default: next to the input, or the CWD)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to merge EOS-separated sentences",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="Print the active rule table and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, load_log_level(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        outputs = run(args)
    except (WordgroupError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        print("Error: {}".format(exc), file=sys.stderr)
        sys.exit(1)

    if not args.save:
        for output in outputs:
            sys.stdout.write(output.content)
        return

    if args.output_dir:
        output_dir = Path(args.output_dir)
    elif args.input and args.input != "-":
        output_dir = Path(args.input).resolve().parent
    else:
        output_dir = Path.cwd()
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(args.input).stem if args.input and args.input != "-" else "stdin"

    for output in outputs:
        path = _save_output(output, stem, output_dir)
        _status("  Saved: {}".format(path))
