"""Unit tests for the command line interface."""

import logging

import numpy as np
import pytest
from click.testing import CliRunner

from pyvoxnoise.cli.generate_commands import generate
from pyvoxnoise.cli.preview_commands import preview, render_preview
from pyvoxnoise.errors import DomainError
from pyvoxnoise.grid import VolumeGrid
from pyvoxnoise.io import read_raw


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """The commands reconfigure the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGenerateCommand:
    """Test pvn-generate."""

    @pytest.mark.unit
    def test_help(self, runner):
        result = runner.invoke(generate, ["--help"])
        assert result.exit_code == 0
        assert "Generate 3D noise volumes" in result.output
        assert "--seed" in result.output

    @pytest.mark.unit
    def test_requires_a_name(self, runner):
        result = runner.invoke(generate, [])
        assert result.exit_code != 0

    @pytest.mark.unit
    def test_generate(self, runner, input_dir, tmp_path):
        output_dir = tmp_path / "output"
        result = runner.invoke(generate, [
            "clouds", "-i", str(input_dir), "-o", str(output_dir), "--seed", "1234",
        ])

        assert result.exit_code == 0, result.output
        assert "Generated 'clouds' (16x8x4, 3 channel(s))" in result.output
        assert (output_dir / "clouds.dat").stat().st_size == 16 * 8 * 4 * 3
        assert (output_dir / "cloudsSlice.png").exists()

    @pytest.mark.unit
    def test_seed_makes_output_reproducible(self, runner, input_dir, tmp_path):
        outputs = []
        for run in range(2):
            output_dir = tmp_path / f"run{run}"
            result = runner.invoke(generate, [
                "clouds", "-i", str(input_dir), "-o", str(output_dir), "--seed", "77", "-j", "2",
            ])
            assert result.exit_code == 0, result.output
            outputs.append((output_dir / "clouds.dat").read_bytes())
        assert outputs[0] == outputs[1]

    @pytest.mark.unit
    def test_zero_seed(self, runner, input_dir, tmp_path):
        output_dir = tmp_path / "output"
        result = runner.invoke(generate, [
            "clouds", "-i", str(input_dir), "-o", str(output_dir), "--seed", "0",
        ])
        assert result.exit_code == 0, result.output

        data = np.frombuffer((output_dir / "clouds.dat").read_bytes(), dtype=np.uint8).reshape(4, 8, 16, 3)
        # The two repeated gradient channels
        assert not np.array_equal(data[..., 0], data[..., 1])

    @pytest.mark.unit
    def test_all_slices(self, runner, input_dir, tmp_path):
        output_dir = tmp_path / "output"
        result = runner.invoke(generate, [
            "clouds", "-i", str(input_dir), "-o", str(output_dir), "--seed", "1", "--all-slices",
        ])
        assert result.exit_code == 0, result.output
        for z in range(4):
            assert (output_dir / f"cloudsSlice{z}.png").exists()

    @pytest.mark.unit
    def test_failure_does_not_stop_batch(self, runner, input_dir, tmp_path):
        output_dir = tmp_path / "output"
        result = runner.invoke(generate, [
            "missing", "clouds", "-i", str(input_dir), "-o", str(output_dir), "--seed", "5",
        ])

        assert result.exit_code == 1
        assert "Failed to generate missing" in result.output
        assert "does not exist" in result.output
        assert not (output_dir / "missing.dat").exists()
        assert (output_dir / "clouds.dat").exists()

    @pytest.mark.unit
    def test_missing_tiled_noise(self, runner, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        (input_dir / "blue.txt").write_text("4x4x4\n~\nmode:blueNoise\nblueNoiseRes:8\n")
        output_dir = tmp_path / "output"

        result = runner.invoke(generate, [
            "blue", "-i", str(input_dir), "-o", str(output_dir),
            "--tiled-dir", str(tmp_path / "nowhere"),
        ])

        assert result.exit_code == 1
        assert "LDR_RGBA_0" in result.output
        assert not (output_dir / "blue.dat").exists()

    @pytest.mark.unit
    def test_tiled_noise(self, runner, tiled_dir, tiled_pattern, tmp_path):
        input_dir = tmp_path / "input"
        input_dir.mkdir()
        (input_dir / "blue.txt").write_text("8x8x8\n~\nmode:blueNoise\nblueNoiseRes:8\n")
        output_dir = tmp_path / "output"

        result = runner.invoke(generate, [
            "blue", "-i", str(input_dir), "-o", str(output_dir), "--tiled-dir", str(tiled_dir),
        ])

        assert result.exit_code == 0, result.output
        data = np.frombuffer((output_dir / "blue.dat").read_bytes(), dtype=np.uint8)
        # Channel 0 at voxel (x, y, z) reads pattern texel (x, y, z)
        expected = np.floor(tiled_pattern[..., 0] / 256.0 * 255.99).astype(np.uint8)
        np.testing.assert_array_equal(data, expected.reshape(-1))


class TestPreviewCommand:
    """Test pvn-preview."""

    @pytest.fixture
    def volume_file(self, tmp_path):
        grid = VolumeGrid((8, 8, 6), 2)
        grid.process(lambda pos, channel: pos[:, channel])
        path = tmp_path / "ramp.dat"
        grid.write_file(path)
        return path

    @pytest.mark.unit
    def test_help(self, runner):
        result = runner.invoke(preview, ["--help"])
        assert result.exit_code == 0
        assert "Render evenly spaced z-slices" in result.output

    @pytest.mark.unit
    def test_render(self, runner, volume_file, tmp_path):
        output = tmp_path / "preview.png"
        result = runner.invoke(preview, [
            str(volume_file), "-s", "8x8x6", "-c", "2", "--channel", "1", "-o", str(output), "-v",
        ])

        assert result.exit_code == 0, result.output
        assert output.exists()
        assert "Channel 1: mean" in result.output

    @pytest.mark.unit
    def test_default_output_name(self, runner, volume_file):
        result = runner.invoke(preview, [str(volume_file), "-s", "8x8x6", "-c", "2"])
        assert result.exit_code == 0, result.output
        assert volume_file.with_name("rampPreview.png").exists()

    @pytest.mark.unit
    def test_size_mismatch(self, runner, volume_file):
        result = runner.invoke(preview, [str(volume_file), "-s", "8x8x6", "-c", "4"])
        assert result.exit_code == 1
        assert "Error:" in result.output

    @pytest.mark.unit
    def test_bad_channel(self, runner, volume_file):
        result = runner.invoke(preview, [str(volume_file), "-s", "8x8x6", "-c", "2", "--channel", "3"])
        assert result.exit_code == 2
        assert "Channel 3 outside 0-1" in result.output

    @pytest.mark.unit
    def test_render_preview_rejects_channel(self, volume_file, tmp_path):
        grid = read_raw(volume_file, (8, 8, 6), 2)
        with pytest.raises(DomainError):
            render_preview(grid, tmp_path / "never.png", channel=2)
        assert not (tmp_path / "never.png").exists()
