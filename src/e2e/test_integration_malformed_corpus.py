from pathlib import Path
import pytest
from hibpdb.DB.builder import generate_db
from hibpdb.errors import MalformedInputError

GOOD = "000000" + "0" * 34

def _seed(tmp: Path, *lines: str) -> str:
    p = tmp / "corpus.txt"
    p.write_text("\n".join(lines) + "\n", encoding="ascii")
    return str(p)

@pytest.mark.e2e
def test_short_line_aborts_build(tmp_path: Path):
    corpus = _seed(tmp_path, GOOD, "00000100000000000000000000000000000000")  # 38 chars
    db = tmp_path / "x.db"
    with pytest.raises(MalformedInputError) as ei:
        generate_db(corpus, str(db))
    assert ei.value.line_no == 2
    assert not db.exists()
    assert not (tmp_path / "x.db.tmp").exists()

@pytest.mark.e2e
@pytest.mark.parametrize("bad", [
    "00000g" + "0" * 34,          # non-hex prefix
    "000001" + "0" * 33 + "z",    # non-hex suffix
    "+00001" + "0" * 34,
    "000001" + "0" * 16 + " " + "0" * 17,
])
def test_non_hex_line_aborts_build(tmp_path: Path, bad: str):
    corpus = _seed(tmp_path, GOOD, bad)
    with pytest.raises(MalformedInputError):
        generate_db(corpus, str(tmp_path / "x.db"))

@pytest.mark.e2e
def test_blank_line_is_malformed(tmp_path: Path):
    corpus = _seed(tmp_path, GOOD, "", GOOD)
    with pytest.raises(MalformedInputError):
        generate_db(corpus, str(tmp_path / "x.db"))

@pytest.mark.e2e
def test_failed_rebuild_keeps_previous_database(tmp_path: Path):
    db = tmp_path / "keep.db"
    generate_db(_seed(tmp_path, GOOD), str(db))
    before = db.read_bytes()

    bad = tmp_path / "bad.txt"
    bad.write_text(GOOD + "\nnot-a-hash\n", encoding="ascii")
    with pytest.raises(MalformedInputError):
        generate_db(str(bad), str(db))
    assert db.read_bytes() == before

@pytest.mark.e2e
def test_missing_corpus_raises_oserror(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        generate_db(str(tmp_path / "nope.txt"), str(tmp_path / "x.db"))
