"""
    Command line entry point for the Porter stemmer.

    Stems the words given as arguments, or with --test compares the stemmer against a reference
    vocabulary: one input word per line in voc.txt and the expected stem on the same line of output.txt.

"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

from tqdm import tqdm

from porter_stemmer import stem

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
VOC_TXT = DATA_DIR / "voc.txt"
OUTPUT_TXT = DATA_DIR / "output.txt"


class Mismatch(NamedTuple):
    word: str
    stemmed: str
    expected: str


class CheckResult(NamedTuple):
    passed: int
    failed: int
    mismatches: List[Mismatch]


def read_lines(path: Path) -> List[str]:
    with path.open(encoding="utf-8") as fh:
        return fh.read().splitlines()


def load_pairs(voc_path: Path, expected_path: Path) -> List[Tuple[str, str]]:
    words = read_lines(voc_path)
    expected = read_lines(expected_path)
    if len(words) != len(expected):
        raise ValueError(
            f"{voc_path.name} has {len(words)} lines but {expected_path.name} has {len(expected)}"
        )
    return list(zip(words, expected))


def check_pairs(pairs: List[Tuple[str, str]]) -> CheckResult:
    passed = 0
    mismatches: List[Mismatch] = []
    bar_fmt = "{n_fmt}/{total_fmt} [{elapsed}<{remaining}, {rate_fmt}]"
    for word, expected in tqdm(pairs, bar_format=bar_fmt):
        stemmed = stem(word)
        if stemmed != expected:
            mismatches.append(Mismatch(word, stemmed, expected))
        else:
            passed += 1
    return CheckResult(passed, len(mismatches), mismatches)


def run_test(voc_path: Path = VOC_TXT, expected_path: Path = OUTPUT_TXT) -> Optional[CheckResult]:
    try:
        pairs = load_pairs(voc_path, expected_path)
    except (OSError, ValueError) as e:
        print(f"Error reading from file: {e}")
        return None

    result = check_pairs(pairs)
    for m in result.mismatches:
        print(m.word, m.stemmed, m.expected)
    print(f"Passed: {result.passed} Failed: {result.failed}")
    return result


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Porter stemmer")
    p.add_argument("words", nargs="*", help="words to stem")
    p.add_argument("--test", action="store_true", help="check the stemmer against the reference vocabulary")
    p.add_argument("--voc", type=Path, default=VOC_TXT, help="input words, one per line")
    p.add_argument("--expected", type=Path, default=OUTPUT_TXT, help="expected stems, one per line")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.test:
        result = run_test(args.voc, args.expected)
        return 0 if result is not None and result.failed == 0 else 1
    if not args.words:
        parser.error("pass in a word to stem or the --test option")
    for word in args.words:
        print(stem(word))
    return 0


if __name__ == "__main__":
    try: sys.exit(main())
    except KeyboardInterrupt:
        sys.exit("aborted")
