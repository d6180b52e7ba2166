"""
Word lists for the Wordle engine: loading, selection and validation.
"""
from corpus.word_corpus import WordCorpus, CorpusError, LoadError, EmptyPoolError, WORD_LENGTH

__all__ = ["WordCorpus", "CorpusError", "LoadError", "EmptyPoolError", "WORD_LENGTH"]
