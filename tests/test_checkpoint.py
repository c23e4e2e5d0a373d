from checkpoint import clear_checkpoint, load_checkpoint, save_checkpoint


def test_missing_file_gives_empty_checkpoint(tmp_path):
    assert load_checkpoint("find_airports", tmp_path / "cp.json") == {"results": {}, "model": None}


def test_stages_are_kept_separately(tmp_path):
    path = tmp_path / "cp.json"
    save_checkpoint("find_airports", {"results": {"France|Paris": {"airport_code": "CDG"}}, "model": "m"}, path)
    save_checkpoint("categorize_airports", {"results": {"CDG|Charles de Gaulle": {"size": "Large"}}, "model": "m"}, path)

    assert load_checkpoint("find_airports", path)["results"] == {"France|Paris": {"airport_code": "CDG"}}
    assert load_checkpoint("categorize_airports", path)["results"] == {"CDG|Charles de Gaulle": {"size": "Large"}}
    assert load_checkpoint("add_icao_codes", path) == {"results": {}, "model": None}


def test_clear_only_touches_one_stage(tmp_path):
    path = tmp_path / "cp.json"
    save_checkpoint("a", {"results": {"x": 1}, "model": None}, path)
    save_checkpoint("b", {"results": {"y": 2}, "model": None}, path)
    clear_checkpoint("a", path)
    assert load_checkpoint("a", path)["results"] == {}
    assert load_checkpoint("b", path)["results"] == {"y": 2}
