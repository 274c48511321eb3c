from hangar.plane import PlaneShape, make_plane_path


def _write_model(root, name):
    models = root / "include" / "models"
    models.mkdir(parents=True, exist_ok=True)
    path = models / f"{name}.obj"
    path.write_text("o body\n")
    return path


def test_make_plane_path_finds_model(tmp_path):
    expected = _write_model(tmp_path, "plane")
    assert make_plane_path("plane", tmp_path) == expected


def test_make_plane_path_missing_model(tmp_path):
    _write_model(tmp_path, "plane")
    assert make_plane_path("glider", tmp_path) is None


def test_make_plane_path_missing_directory(tmp_path):
    assert make_plane_path("plane", tmp_path) is None


def test_plane_shape_holds_model_path(tmp_path):
    path = _write_model(tmp_path, "jet")
    shape = PlaneShape(name="jet", model_path=make_plane_path("jet", tmp_path))
    assert shape.model_path == path
    assert shape.model_path.suffix == ".obj"
    assert shape.is_dead is False