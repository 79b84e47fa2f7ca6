class StemmerError(Exception):
    """Base class for errors raised by ministem"""


class MeasureInvariantError(StemmerError, AssertionError):
    """
    Raised by the measure calculation when the leading consonant run
    ends after the trailing vowel run begins.

    Signals broken letter counters, never a bad input word.
    """
