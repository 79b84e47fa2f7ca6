from .errors import MeasureInvariantError, StemmerError
from .stemmer import PorterStemmer, stem

__version__ = "0.1.0"

__all__ = [
    "MeasureInvariantError",
    "PorterStemmer",
    "StemmerError",
    "stem",
]
