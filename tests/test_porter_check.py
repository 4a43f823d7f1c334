from __future__ import annotations

import pytest

import porter_check as pc


def _write(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def vocab(tmp_path):
    voc = _write(tmp_path / "voc.txt", ["caresses", "hopping", "relational"])
    out = _write(tmp_path / "output.txt", ["caress", "hop", "relate"])
    return voc, out


def test_check_pairs_collects_mismatches():
    result = pc.check_pairs([("caresses", "caress"), ("relational", "relate")])
    assert result.passed == 1
    assert result.failed == 1
    assert result.mismatches == [pc.Mismatch("relational", "relat", "relate")]


def test_run_test_reports_counts_and_diagnostics(vocab, capsys):
    result = pc.run_test(*vocab)
    out = capsys.readouterr().out
    assert result is not None
    assert (result.passed, result.failed) == (2, 1)
    assert "relational relat relate" in out
    assert "Passed: 2 Failed: 1" in out


def test_run_test_aborts_on_missing_file(tmp_path, capsys):
    result = pc.run_test(tmp_path / "missing.txt", tmp_path / "output.txt")
    assert result is None
    assert "Error reading from file" in capsys.readouterr().out


def test_load_pairs_rejects_uneven_lists(tmp_path):
    voc = _write(tmp_path / "voc.txt", ["cats", "dogs"])
    out = _write(tmp_path / "output.txt", ["cat"])
    with pytest.raises(ValueError):
        pc.load_pairs(voc, out)


def test_main_stems_words(capsys):
    assert pc.main(["running", "ponies"]) == 0
    assert capsys.readouterr().out.split() == ["run", "poni"]


def test_main_without_arguments_is_usage_error():
    with pytest.raises(SystemExit) as exc:
        pc.main([])
    assert exc.value.code == 2


def test_main_test_mode_exit_status(vocab, tmp_path):
    voc, out = vocab
    assert pc.main(["--test", "--voc", str(voc), "--expected", str(out)]) == 1
    good = _write(tmp_path / "good.txt", ["caress", "hop", "relat"])
    assert pc.main(["--test", "--voc", str(voc), "--expected", str(good)]) == 0
    assert pc.main(["--test", "--voc", str(tmp_path / "nope.txt")]) == 1


def test_bundled_vocabulary_passes(capsys):
    assert pc.main(["--test"]) == 0
    assert "Failed: 0" in capsys.readouterr().out
