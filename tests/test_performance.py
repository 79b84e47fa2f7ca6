import os
import timeit
import statistics
import pytest
from ministem import PorterStemmer

ASSETS = os.path.join(os.path.dirname(__file__), "assets")


@pytest.fixture
def vocabulary():
    with open(os.path.join(ASSETS, "voc.txt"), "r") as f:
        return [w.strip() for w in f.readlines()]


def time_stemmer(name, stem_word, vocabulary, rounds=50):
    times = []

    for _ in range(rounds):
        times.append(
            timeit.timeit(lambda: [stem_word(w) for w in vocabulary], number=1)
        )

    print(f"\n{name}: {len(vocabulary)} WORDS x {rounds} ROUNDS")
    print(f"FULL TIME: {sum(times)}")
    print(f"MIN TIME: {min(times)}")
    print(f"MAX TIME: {max(times)}")
    print(f"AVG TIME: {statistics.mean(times)}")


def test_performance(vocabulary):
    stemmer = PorterStemmer()

    # bypass the lru cache
    uncached = PorterStemmer.stem.__wrapped__
    time_stemmer("MINISTEM (UNCACHED)", lambda w: uncached(stemmer, w), vocabulary)
    time_stemmer("MINISTEM (CACHED)", stemmer.stem, vocabulary)


def test_performance_whoosh(vocabulary):
    porter = pytest.importorskip("whoosh.lang.porter")
    time_stemmer("WHOOSH PORTER", porter.stem, vocabulary)


def test_performance_pystemmer(vocabulary):
    Stemmer = pytest.importorskip("Stemmer")
    time_stemmer("PYSTEMMER PORTER", Stemmer.Stemmer("porter").stemWord, vocabulary)
