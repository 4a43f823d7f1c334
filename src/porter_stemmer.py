"""
    This is the implementation of the Porter stemmer for English.

    The rule set follows the Apache Lucene PorterStemmer (M.F. Porter, "An algorithm for suffix stripping", 1980),
    including its departures from the paper: "bli" -> "ble", "logi" -> "log" and the double "l" trim of the last step.

"""
from typing import Callable, List, Optional, Pattern, Tuple

import regex as re

VOWELS = frozenset("aeiou")


class SuffixRule:
    def __init__(
        self,
        suffix: str,
        replacement: str,
        min_measure: int,
        condition: Optional[Callable[[str], bool]] = None,
    ):
        self.suffix = suffix
        self.replacement = replacement
        self.min_measure = min_measure
        self.condition = condition


def _consonant_flags(text: str) -> List[bool]:
    flags: List[bool] = []
    for i, char in enumerate(text):
        if char in VOWELS:
            flags.append(False)
        elif char == "y" and i > 0:
            flags.append(not flags[i - 1])
        else:
            flags.append(True)
    return flags


def is_consonant(text: str, index: int) -> bool:
    """'y' is a consonant at the start of a word or after a vowel."""
    flipped = False
    while True:
        char = text[index]
        if char in VOWELS:
            consonant = False
            break
        if char != "y" or index == 0:
            consonant = True
            break
        flipped = not flipped
        index -= 1
    return consonant != flipped


def has_vowel(text: str) -> bool:
    return not all(_consonant_flags(text))


def measure(text: str) -> int:
    """Number of VC pairs in [C](VC)^m[V]."""
    flags = _consonant_flags(text)
    n = len(flags)
    i = 0
    while i < n and flags[i]:
        i += 1
    m = 0
    while i < n:
        while i < n and not flags[i]:
            i += 1
        if i >= n:
            break
        m += 1
        while i < n and flags[i]:
            i += 1
    return m


def ends_in_double_consonant(text: str) -> bool:
    if not text:
        return False
    last = text[-1]
    return is_consonant(last, 0) and text.endswith(last + last)


def ends_in_cvc(text: str, word: Optional[str] = None) -> bool:
    # the first two positions are classified against the working word, the last letter on its own
    if len(text) < 3:
        return False
    if word is None:
        word = text
    last = text[-1]
    if not is_consonant(word, len(text) - 3) or is_consonant(word, len(text) - 2) or not is_consonant(last, 0):
        return False
    return last not in ("w", "x", "y")


def replace_if_sequences(word: str, old: str, new: str, min_measure: int = 0) -> Tuple[str, bool]:
    """Swap the suffix `old` for `new` when the remaining stem has measure above `min_measure`.

    The second value reports whether `word` ended with `old` at all, so a matched suffix
    ends its round even when the measure gate keeps the word unchanged.
    """
    if not word.endswith(old):
        return word, False
    base = word[: -len(old)]
    if measure(base) > min_measure:
        return base + new, True
    return word, True


def trim_if_sequences(word: str, suffix: str) -> Tuple[str, bool]:
    return replace_if_sequences(word, suffix, "", 1)


def _ion_follows_s_or_t(word: str) -> bool:
    return len(word) >= 4 and word[-4] in ("s", "t")


ROUND_ONE: List[SuffixRule] = [
    SuffixRule(suffix, replacement, 0)
    for suffix, replacement in [
        ("ational", "ate"),
        ("tional", "tion"),
        ("enci", "ence"),
        ("anci", "ance"),
        ("izer", "ize"),
        ("bli", "ble"),
        ("alli", "al"),
        ("entli", "ent"),
        ("eli", "e"),
        ("ousli", "ous"),
        ("ization", "ize"),
        ("ation", "ate"),
        ("ator", "ate"),
        ("alism", "al"),
        ("iveness", "ive"),
        ("fulness", "ful"),
        ("ousness", "ous"),
        ("aliti", "al"),
        ("iviti", "ive"),
        ("biliti", "ble"),
        ("logi", "log"),
    ]
]

ROUND_TWO: List[SuffixRule] = [
    SuffixRule(suffix, replacement, 0)
    for suffix, replacement in [
        ("icate", "ic"),
        ("ative", ""),
        ("alize", "al"),
        ("iciti", "ic"),
        ("ical", "ic"),
        ("ful", ""),
        ("ness", ""),
    ]
]

ROUND_THREE: List[SuffixRule] = [
    SuffixRule("al", "", 1),
    SuffixRule("ance", "", 1),
    SuffixRule("ence", "", 1),
    SuffixRule("er", "", 1),
    SuffixRule("ic", "", 1),
    SuffixRule("able", "", 1),
    SuffixRule("ible", "", 1),
    SuffixRule("ant", "", 1),
    SuffixRule("ement", "", 1),
    SuffixRule("ment", "", 1),
    SuffixRule("ent", "", 1),
    SuffixRule("ion", "", 1, _ion_follows_s_or_t),
    SuffixRule("ou", "", 1),
    SuffixRule("ism", "", 1),
    SuffixRule("ate", "", 1),
    SuffixRule("iti", "", 1),
    SuffixRule("ous", "", 1),
    SuffixRule("ive", "", 1),
    SuffixRule("ize", "", 1),
]


def apply_round(word: str, rules: List[SuffixRule]) -> str:
    for rule in rules:
        if rule.condition is not None and not rule.condition(word):
            continue
        word, matched = replace_if_sequences(word, rule.suffix, rule.replacement, rule.min_measure)
        if matched:
            break
    return word


def remove_plurals(word: str) -> str:
    if word.endswith("s"):
        if word.endswith("sses") or word.endswith("ies"):
            return word[:-2]
        if word[-2:-1] != "s":
            return word[:-1]
    return word


def remove_tenses(word: str) -> str:
    if word.endswith("eed"):
        if measure(word[:-3]) > 0:
            return word[:-1]
        return word

    has_past = word.endswith("ed") and has_vowel(word[:-2])
    has_active = word.endswith("ing") and has_vowel(word[:-3])
    if has_past:
        word = word[:-2]
    elif has_active:
        word = word[:-3]
    else:
        return word

    if word.endswith("at") or word.endswith("bl") or word.endswith("iz"):
        return word + "e"
    if ends_in_double_consonant(word):
        if word[-1] not in ("l", "s", "z"):
            return word[:-1]
        return word
    if measure(word) == 1 and ends_in_cvc(word):
        return word + "e"
    return word


def turn_y_to_i(word: str) -> str:
    if word.endswith("y") and has_vowel(word[:-1]):
        return word[:-1] + "i"
    return word


def clean_suffixes(word: str) -> str:
    for rules in (ROUND_ONE, ROUND_TWO, ROUND_THREE):
        word = apply_round(word, rules)
    return word


def remove_final_letter(word: str) -> str:
    if word.endswith("e"):
        base = word[:-1]
        m = measure(base)
        if m > 1 or (m == 1 and not ends_in_cvc(base, word)):
            word = base
    if word.endswith("l") and ends_in_double_consonant(word) and measure(word[:-1]) > 1:
        word = word[:-1]
    return word


def stem(word: str) -> str:
    """Return the stem of a lowercase ASCII word."""
    if len(word) <= 2:
        return word
    word = remove_plurals(word)
    word = remove_tenses(word)
    word = turn_y_to_i(word)
    word = clean_suffixes(word)
    return remove_final_letter(word)


processable_pattern: Pattern = re.compile(r"^[a-z]+$")


def stem_tokens(tokens: List[str]) -> List[str]:
    """Stem every plain-letter token in a list, leaving the others as they are."""
    stems = []
    for token in tokens:
        t = token.lower()
        stems.append(stem(t) if processable_pattern.match(t) else token)
    return stems
