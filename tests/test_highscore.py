import json

from starfall.highscore import JsonHighScoreStore, MemoryHighScoreStore


def test_missing_file_reads_zero(tmp_path):
    assert JsonHighScoreStore(str(tmp_path / "none.json")).load() == 0


def test_save_then_load(tmp_path):
    store = JsonHighScoreStore(str(tmp_path / "hs.json"))
    store.save(340)
    assert store.load() == 340

    data = json.loads((tmp_path / "hs.json").read_text())
    assert data["high_score"] == 340
    assert "last_updated" in data


def test_broken_files_read_zero(tmp_path):
    path = tmp_path / "hs.json"
    for content in ("not json", "[1, 2]", '{"high_score": "abc"}', '{"high_score": -5}'):
        path.write_text(content)
        assert JsonHighScoreStore(str(path)).load() == 0


def test_unwritable_path_does_not_raise(tmp_path):
    store = JsonHighScoreStore(str(tmp_path / "missing_dir" / "hs.json"))
    store.save(10)
    assert store.load() == 0


def test_memory_store_counts_saves():
    store = MemoryHighScoreStore(5)
    assert store.load() == 5
    store.save(7)
    assert store.load() == 7
    assert store.saves == 1
