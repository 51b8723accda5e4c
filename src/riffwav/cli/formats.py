from riffwav.format import SampleFormat

FORMAT_NAMES: dict[str, SampleFormat] = {
    "pcm8": SampleFormat.PCM_8,
    "pcm16": SampleFormat.PCM_16,
    "pcm24": SampleFormat.PCM_24,
    "pcm32": SampleFormat.PCM_32,
    "float32": SampleFormat.FLOAT_32,
    "float64": SampleFormat.FLOAT_64,
}


def parse_format_name(name: str) -> SampleFormat:
    """Look up a sample format by its command line name."""
    try:
        return FORMAT_NAMES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown sample format: {name}") from None
