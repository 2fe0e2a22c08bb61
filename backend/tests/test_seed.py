import json
import pytest
from seed import load_streams, seed_streams

def test_seed_streams_from_json(tmp_path, repository):
    path = tmp_path / "streams.json"
    path.write_text(json.dumps([
        {"stream_name": "Seeded One", "genres": ["Rock"], "codec_sub_types": ["MP3"]},
        {"stream_name": "Seeded Two", "genres": ["Jazz"], "listeners": 7},
    ]), encoding="utf-8")

    count = seed_streams(repository, load_streams(str(path)))
    assert count == 2
    assert repository.get_all_genres() == ["Jazz", "Rock"]
    assert repository.get_all_formats() == ["MP3"]

def test_seed_ignores_ids_in_file(tmp_path, repository):
    from factories import make_stream
    existing = repository.add(make_stream(stream_name="Existing"))

    path = tmp_path / "streams.json"
    path.write_text(json.dumps([
        {"id": existing.id, "stream_name": "Dup Id"},
        {"id": 1000, "stream_name": "Far Id"},
    ]), encoding="utf-8")

    assert seed_streams(repository, load_streams(str(path))) == 2
    assert repository.get_by_id(1000) is None
    assert repository.get_by_id(existing.id).stream_name == "Existing"
    # 後続の採番も衝突しない
    assert repository.add(make_stream(stream_name="Later")).id is not None

def test_seed_file_must_be_array(tmp_path):
    path = tmp_path / "streams.json"
    path.write_text(json.dumps({"stream_name": "x"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_streams(str(path))
