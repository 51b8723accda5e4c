"""Interoperability tests against libsndfile (via soundfile)."""

import io
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from riffwav.format import SampleFormat, Wav, WavAcid, WavSampler, load_wav, read_wav, write_wav

SUBTYPES = {
    SampleFormat.PCM_8: "PCM_U8",
    SampleFormat.PCM_16: "PCM_16",
    SampleFormat.PCM_24: "PCM_24",
    SampleFormat.PCM_32: "PCM_32",
    SampleFormat.FLOAT_32: "FLOAT",
    SampleFormat.FLOAT_64: "DOUBLE",
}


def _test_signal(num_samples: int = 256) -> np.ndarray:
    t = np.arange(num_samples) / num_samples
    left = 0.8 * np.sin(2 * np.pi * 3 * t)
    right = 0.5 * np.cos(2 * np.pi * 5 * t)
    return np.stack([left, right], axis=1)


class TestSoundfileReadsOurFiles:
    """Files written by write_wav decode identically in libsndfile."""

    @pytest.mark.parametrize("fmt", list(SampleFormat))
    def test_samples_match(self, fmt: SampleFormat) -> None:
        signal = _test_signal()
        wav = Wav(
            [signal[:, 0], signal[:, 1]],
            44100,
            format=fmt,
            sampler=WavSampler(root_note=60),
            acid=WavAcid(bpm=120.0),
        )

        data, sample_rate = sf.read(io.BytesIO(write_wav(wav)), dtype="float64", always_2d=True)
        ours = read_wav(write_wav(wav))

        assert sample_rate == 44100
        assert data.shape == (256, 2)
        np.testing.assert_allclose(data[:, 0], ours.channels[0], atol=1e-9)
        np.testing.assert_allclose(data[:, 1], ours.channels[1], atol=1e-9)


class TestWeReadSoundfileFiles:
    """Files written by libsndfile decode with read_wav."""

    @pytest.mark.parametrize("fmt", list(SampleFormat))
    def test_samples_match(self, fmt: SampleFormat, tmp_path: Path) -> None:
        signal = _test_signal()
        path = tmp_path / f"{fmt.name.lower()}.wav"
        sf.write(path, signal, 48000, subtype=SUBTYPES[fmt], format="WAV")

        wav = load_wav(path)
        expected, _ = sf.read(path, dtype="float64", always_2d=True)

        assert wav.format is fmt
        assert wav.sample_rate == 48000
        assert wav.num_channels == 2
        np.testing.assert_allclose(wav.channels[0], expected[:, 0], atol=1e-9)
        np.testing.assert_allclose(wav.channels[1], expected[:, 1], atol=1e-9)
