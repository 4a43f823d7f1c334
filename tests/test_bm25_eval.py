from __future__ import annotations

import argparse

import pytest

import bm25_eval as be
from porter_stemmer import stem_tokens


def _identity(toks):
    return toks


DOCS = {1: "Cats running", 2: "dogs barked"}
QUERIES = {1: "cat", 2: "dog"}


def test_tokenize_splits_on_letters():
    assert be.tokenize("Don't STOP, 42 times") == ["don", "t", "stop", "times"]


def test_build_index_maps_normalised_tokens_to_docs():
    index = be.build_index({1: "cats and dogs", 2: "a cat"}, stem_tokens)
    assert index["cat"] == [1, 2]
    assert index["dog"] == [1]


def test_bm25_score_at_average_length_equals_idf_for_single_hit():
    assert be.bm25_score(1, 10, 10.0, 2.0) == pytest.approx(2.0)


def test_stemming_recovers_inflected_matches():
    raw = be.evaluate(DOCS, QUERIES, _identity)
    porter = be.evaluate(DOCS, QUERIES, stem_tokens)
    assert raw == (0.0, 0.0)
    assert porter == (1.0, 1.0)


def test_resolve_normaliser_and_label():
    args = argparse.Namespace(porter=True)
    assert be.label(args) == "Porter"
    assert be.resolve_normaliser(args) is stem_tokens
    raw = argparse.Namespace(porter=False)
    assert be.label(raw) == "raw"
    assert be.resolve_normaliser(raw)(["cats"]) == ["cats"]


def test_bundled_sample_improves_with_stemming():
    documents = be.load_csv(be.DOC_CSV, "text")
    queries = be.load_csv(be.QUERY_CSV, "query")
    raw_recall, _ = be.evaluate(documents, queries, _identity)
    porter_recall, _ = be.evaluate(documents, queries, stem_tokens)
    assert porter_recall > raw_recall


def test_load_csv_missing_file_exits(tmp_path):
    with pytest.raises(SystemExit) as exc:
        be.load_csv(tmp_path / "missing.csv", "text")
    assert "file not found" in str(exc.value.code)
