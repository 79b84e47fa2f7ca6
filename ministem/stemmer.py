import enum
import logging
from functools import lru_cache
from typing import Callable, NamedTuple, Optional

from line_profiler import profile

from .errors import MeasureInvariantError

logger = logging.getLogger(__name__)


VOWELS = ("a", "e", "i", "o", "u")
CVC_EXCLUDED = ("w", "x", "y")


class LetterType(enum.Enum):
    VOWEL = "vowel"
    CONSONANT = "consonant"


def _classify(c: str) -> LetterType:
    # 'y' is a consonant everywhere in this algorithm
    if c.lower() in VOWELS:
        return LetterType.VOWEL

    return LetterType.CONSONANT


def _is_vowel(c: str) -> bool:
    return _classify(c) is LetterType.VOWEL


def _is_consonant(c: str) -> bool:
    return _classify(c) is LetterType.CONSONANT


def _ends_with(candidate: str, suffix: str) -> bool:
    if len(candidate) < len(suffix):
        return False

    return candidate[len(candidate) - len(suffix) :] == suffix


def _replace_ending(candidate: str, suffix_length: int, replacement: str) -> str:
    return candidate[: len(candidate) - suffix_length] + replacement


def _count_leading_consonants(word: str) -> int:
    count = 0
    while count < len(word) and _is_consonant(word[count]):
        count += 1

    return count


def _count_trailing_vowels(word: str) -> int:
    count = 0
    while count < len(word) and _is_vowel(word[len(word) - 1 - count]):
        count += 1

    return count


def _ends_with_double_consonant(word: str) -> bool:
    if len(word) < 2:
        return False

    return word[-1] == word[-2] and _is_consonant(word[-1])


def _ends_with_cvc(word: str) -> bool:
    if len(word) < 3:
        return False

    return (
        _is_consonant(word[-3])
        and _is_vowel(word[-2])
        and _is_consonant(word[-1])
        and word[-1].lower() not in CVC_EXCLUDED
    )


def _contains_vowel(word: str) -> bool:
    return any(_is_vowel(c) for c in word)


def _measure(word: str) -> int:
    """
    Number of VC pairs in a word of the form [C](VC){m}[V].

    The leading consonant run and the trailing vowel run are cut off first,
    what is left starts with a vowel and ends with a consonant. Every change
    of letter type inside it is counted and two changes make one pair.
    """
    begin = _count_leading_consonants(word)
    end = len(word) - _count_trailing_vowels(word)

    if begin > end:
        logger.error(
            "measure invariant broken for %r: begin=%d > end=%d", word, begin, end
        )
        raise MeasureInvariantError(
            f"begin ({begin}) > end ({end}) while measuring {word!r}, "
            "check the consonant and vowel counters"
        )

    core = word[begin:end]
    if not core:
        return 0

    transitions = 0
    last_type = LetterType.VOWEL
    for c in core[1:]:
        if (letter_type := _classify(c)) is not last_type:
            last_type = letter_type
            transitions += 1

    return (transitions + 1) // 2


def _apply_rule(candidate: str, suffix: str, replacement: str) -> tuple[bool, str]:
    if _ends_with(candidate, suffix):
        return True, _replace_ending(candidate, len(suffix), replacement)

    return False, candidate


def _strip_suffix_if_present(candidate: str, suffix: str) -> str:
    return _apply_rule(candidate, suffix, "")[1]


class Rule(NamedTuple):
    suffix: str
    replacement: str
    # evaluated on the word with the suffix removed
    condition: Optional[Callable[[str], bool]] = None


def _measure_positive(stem: str) -> bool:
    return _measure(stem) > 0


def _measure_above_one(stem: str) -> bool:
    return _measure(stem) > 1


def _ion_stem(stem: str) -> bool:
    return _measure(stem) > 1 and (_ends_with(stem, "s") or _ends_with(stem, "t"))


def _apply_first(word: str, rules: tuple[Rule, ...]) -> tuple[bool, str]:
    """
    Try ``rules`` in order and rewrite ``word`` with the first one whose
    suffix matches and whose condition holds. A rule whose condition fails
    does not stop the scan.
    """
    for rule in rules:
        if not _ends_with(word, rule.suffix):
            continue

        if rule.condition is None or rule.condition(
            _strip_suffix_if_present(word, rule.suffix)
        ):
            return _apply_rule(word, rule.suffix, rule.replacement)

    return False, word


class PorterStemmer:
    """
    Porter stemmer following the rules of the original paper
    https://tartarus.org/martin/PorterStemmer/def.txt

    'y' is always treated as a consonant. Suffix comparisons are case
    sensitive, callers wanting case insensitive stemming lowercase first.
    """

    CACHE_SIZE = 1024

    STEP_1A_RULES = (
        Rule("sses", "ss"),
        Rule("ies", "i"),
        Rule("ss", "ss"),
        Rule("s", ""),
    )

    STEP_1B_RULES = (
        Rule("ed", "", _contains_vowel),
        Rule("ing", "", _contains_vowel),
    )

    STEP_1B_CLEANUP_RULES = (
        Rule("at", "ate"),
        Rule("bl", "ble"),
        Rule("iz", "ize"),
    )

    STEP_1B_KEPT_DOUBLES = ("l", "s", "z")

    STEP_1C_RULES = (Rule("y", "i", _contains_vowel),)

    STEP_2_RULES = tuple(
        Rule(suffix, replacement, _measure_positive)
        for suffix, replacement in (
            ("ational", "ate"),
            ("tional", "tion"),
            ("enci", "ence"),
            ("anci", "ance"),
            ("izer", "ize"),
            ("abli", "able"),
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
        )
    )

    STEP_3_RULES = tuple(
        Rule(suffix, replacement, _measure_positive)
        for suffix, replacement in (
            ("icate", "ic"),
            ("ative", ""),
            ("alize", "al"),
            ("iciti", "ic"),
            ("ical", "ic"),
            ("ful", ""),
            ("ness", ""),
        )
    )

    STEP_4_RULES = (
        *(
            Rule(suffix, "", _measure_above_one)
            for suffix in (
                "al",
                "ance",
                "ence",
                "er",
                "ic",
                "able",
                "ible",
                "ant",
                "ement",
                "ment",
                "ent",
            )
        ),
        Rule("ion", "", _ion_stem),
        *(
            Rule(suffix, "", _measure_above_one)
            for suffix in ("ou", "ism", "ate", "iti", "ous", "ive", "ize")
        ),
    )

    @lru_cache(maxsize=CACHE_SIZE)
    @profile
    def stem(self, word: str) -> str:
        """
        Run ``word`` through steps 1a to 5 and return its stem.
        Empty words are returned as is.
        """
        if not word:
            return word

        result = self.step_1a(word)
        result = self.step_1b(result)
        result = self.step_1c(result)
        result = self.step_2(result)
        result = self.step_3(result)
        result = self.step_4(result)
        result = self.step_5(result)

        logger.debug("stemmed %r -> %r", word, result)
        return result

    def step_1a(self, word: str) -> str:
        return _apply_first(word, self.__class__.STEP_1A_RULES)[1]

    def step_1b(self, word: str) -> str:
        # 'eed' ends the step whether or not it is rewritten
        if _ends_with(word, "eed"):
            if _measure_positive(_strip_suffix_if_present(word, "eed")):
                return _apply_rule(word, "eed", "ee")[1]

            return word

        stripped, result = _apply_first(word, self.__class__.STEP_1B_RULES)
        if not stripped:
            return word

        return self._step_1b_cleanup(result)

    def _step_1b_cleanup(self, word: str) -> str:
        matched, result = _apply_first(word, self.__class__.STEP_1B_CLEANUP_RULES)
        if matched:
            return result

        if (
            _ends_with_double_consonant(word)
            and word[-1] not in self.__class__.STEP_1B_KEPT_DOUBLES
        ):
            return _replace_ending(word, 1, "")

        if _measure(word) == 1 and _ends_with_cvc(word):
            return word + "e"

        return word

    def step_1c(self, word: str) -> str:
        return _apply_first(word, self.__class__.STEP_1C_RULES)[1]

    def step_2(self, word: str) -> str:
        return _apply_first(word, self.__class__.STEP_2_RULES)[1]

    def step_3(self, word: str) -> str:
        return _apply_first(word, self.__class__.STEP_3_RULES)[1]

    def step_4(self, word: str) -> str:
        return _apply_first(word, self.__class__.STEP_4_RULES)[1]

    def step_5(self, word: str) -> str:
        result = self._step_5a(word)
        return self._step_5b(result)

    def _step_5a(self, word: str) -> str:
        if not _ends_with(word, "e"):
            return word

        stem = _strip_suffix_if_present(word, "e")
        m = _measure(stem)
        if m > 1 or (m == 1 and not _ends_with_cvc(stem)):
            return stem

        return word

    def _step_5b(self, word: str) -> str:
        if (
            _measure(word) > 1
            and _ends_with_double_consonant(word)
            and word[-1] == "l"
        ):
            return _replace_ending(word, 1, "")

        return word


_stemmer = PorterStemmer()


def stem(word: str) -> str:
    """Stem a single word with a shared ``PorterStemmer``."""
    return _stemmer.stem(word)
