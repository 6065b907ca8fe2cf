"""Tests for the command-line entry point."""

import numpy as np
import pytest

from application.cli import main
from infrastructure.terrain.geotiff_adapter import GeoTiffHeightmapAdapter


def _obj_counts(path):
    lines = path.read_text(encoding="ascii").splitlines()
    vertices = [line for line in lines if line.startswith("v ")]
    faces = [line for line in lines if line.startswith("f ")]
    return len(vertices), len(faces)


def test_writes_mesh(tmp_path):
    out = tmp_path / "terrain.obj"
    assert main(["5", "-o", str(out), "--seed", "3"]) == 0
    assert _obj_counts(out) == (25, 32)


def test_default_output_is_out_obj(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert main(["3"]) == 0
    assert (tmp_path / "out.obj").exists()


def test_seed_makes_output_reproducible(tmp_path):
    a, b = tmp_path / "a.obj", tmp_path / "b.obj"
    main(["9", "-o", str(a), "--seed", "5"])
    main(["9", "-o", str(b), "--seed", "5"])
    assert a.read_text() == b.read_text()


def test_writes_heightmap(tmp_path):
    out = tmp_path / "terrain.obj"
    tif = tmp_path / "terrain.tif"
    assert main(["9", "-o", str(out), "--heightmap", str(tif), "--seed", "1"]) == 0

    field = GeoTiffHeightmapAdapter().load_heightmap(tif)
    assert field.grid_size == 9
    heights = np.array(
        [float(line.split()[3]) for line in out.read_text().splitlines() if line[0] == "v"]
    ).reshape(9, 9)
    np.testing.assert_array_equal(heights[:8, :8], field.data)


def test_zero_amplitude_gives_flat_mesh(tmp_path):
    out = tmp_path / "flat.obj"
    assert main(["5", "-o", str(out), "--amplitude", "0"]) == 0
    zs = {line.split()[3] for line in out.read_text().splitlines() if line[0] == "v"}
    assert zs == {"0.0"}


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["6"],
        ["2"],
        ["abc"],
        ["5", "9"],
        ["5", "--amplitude", "-1"],
        ["5", "--amplitude", "inf"],
        ["5", "--amplitude", "nan"],
    ],
)
def test_usage_errors_exit_2(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_invalid_grid_size_message(capsys):
    with pytest.raises(SystemExit):
        main(["10"])
    assert "GRID_SIZE must be a power of two, plus 1 (got 10)" in capsys.readouterr().err


def test_export_failure_returns_1(tmp_path, caplog):
    caplog.set_level("ERROR")
    assert main(["5", "-o", str(tmp_path / "terrain.txt")]) == 1
    assert "Export failed" in caplog.text


class _MaxNoise:
    """Uniform source pinned at its upper bound."""

    def __init__(self, amplitude, seed=None):
        self.amplitude = amplitude

    def perturbation(self):
        return self.amplitude


def test_overflowing_amplitude_returns_1(tmp_path, monkeypatch, caplog):
    monkeypatch.setattr("application.terrain_service.UniformNoiseSource", _MaxNoise)
    caplog.set_level("ERROR")
    out = tmp_path / "terrain.obj"

    assert main(["9", "-o", str(out), "--amplitude", "1e308"]) == 1
    assert "Export failed" in caplog.text
    assert "non-finite" in caplog.text
    assert not out.exists()
