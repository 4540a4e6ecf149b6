from pathlib import Path
import pytest
from hibpdb.engine import Engine

def _seed(tmp: Path) -> str:
    p = tmp / "corpus.txt"
    p.write_text(
        "000000" + "0" * 34 + "\n"
        "000000" + "0" * 33 + "1\n"
        "ffffff" + "0" * 34 + "\n",
        encoding="ascii",
    )
    return str(p)

@pytest.mark.e2e
def test_first_and_last_prefix(tmp_path: Path):
    db = str(tmp_path / "b.db")
    eng = Engine()
    try:
        eng.generate(_seed(tmp_path), db)
        eng.load(db)
        assert eng.lookup("000000").suffixes == ["0" * 34, "0" * 33 + "1"]
        assert eng.lookup("000001").suffixes == []
        assert eng.lookup("fffffe").suffixes == []
        assert eng.lookup("ffffff").suffixes == ["0" * 34]
        assert eng.lookup("FFFFFF").suffixes == ["0" * 34]
    finally:
        eng.shutdown()
