"""
Testing that .env values reach module-level settings imported through app.
"""
import importlib
import sys

import dotenv

import corpus


def test_dotenv_loaded_before_corpus_settings(monkeypatch):
    def fake_load_dotenv(*args, **kwargs):
        monkeypatch.setenv("WORDLE_FETCH_TIMEOUT", "3")
        return True

    monkeypatch.delenv("WORDLE_FETCH_TIMEOUT", raising=False)
    monkeypatch.setattr(dotenv, "load_dotenv", fake_load_dotenv)
    # Re-import app and the sources module; both are restored afterwards
    monkeypatch.setattr(corpus, "sources", corpus.sources, raising=False)
    monkeypatch.delitem(sys.modules, "app", raising=False)
    monkeypatch.delitem(sys.modules, "corpus.sources", raising=False)

    importlib.import_module("app")

    assert sys.modules["corpus.sources"].FETCH_TIMEOUT == 3.0
