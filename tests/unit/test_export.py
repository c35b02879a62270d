from pathlib import Path

import numpy as np
from scipy.io import wavfile

from img2wt.export import save_frames_as_wav


class TestSaveFramesAsWav:
    """Test save_frames_as_wav functionality."""

    def test_one_file_per_row(self, tmp_path: Path):
        """Test that every row becomes its own single-cycle .wav file."""
        table = np.arange(-12, 12, dtype=np.int16).reshape(3, 8)

        paths = save_frames_as_wav(tmp_path / "frames", table)

        assert [p.name for p in paths] == ["frame_000.wav", "frame_001.wav", "frame_002.wav"]
        for row, path in enumerate(paths):
            sample_rate, data = wavfile.read(str(path))
            assert sample_rate == 44100
            assert data.dtype == np.int16
            np.testing.assert_array_equal(data, table[row])

    def test_custom_sample_rate(self, tmp_path: Path):
        table = np.zeros((1, 16), dtype=np.int16)

        (path,) = save_frames_as_wav(tmp_path, table, sample_rate=48000)

        sample_rate, _ = wavfile.read(str(path))
        assert sample_rate == 48000

    def test_wide_index_padding(self, tmp_path: Path):
        """Test that filenames stay sortable for large tables."""
        table = np.zeros((1200, 2), dtype=np.int16)

        paths = save_frames_as_wav(tmp_path, table)

        assert paths[0].name == "frame_0000.wav"
        assert paths[-1].name == "frame_1199.wav"

    def test_empty_table(self, tmp_path: Path):
        output_dir = tmp_path / "none"

        assert save_frames_as_wav(output_dir, np.zeros((0, 8), dtype=np.int16)) == []
        assert output_dir.is_dir()
