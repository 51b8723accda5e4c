"""Validation functions for WAV audio and metadata.

The codec itself never validates: it writes whatever it is given and clamps
integer samples. These checks let callers find values that would be clamped,
padded or rejected by other readers before writing a file.
"""

from dataclasses import dataclass, fields

import numpy as np

from riffwav.format.types import Wav

_UINT32_MAX = 0xFFFFFFFF


class ValidationError(Exception):
    """Error during WAV validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


@dataclass
class ValidationResult:
    """Result of validation with optional warnings."""

    valid: bool
    errors: list[str]
    warnings: list[str]

    @classmethod
    def success(cls, warnings: list[str] | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True, errors=[], warnings=warnings or [])

    @classmethod
    def failure(cls, errors: list[str], warnings: list[str] | None = None) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, errors=errors, warnings=warnings or [])

    def raise_for_errors(self) -> None:
        """Raise :class:`ValidationError` if validation failed."""
        if not self.valid:
            raise ValidationError(f"Validation failed: {self.errors}")


def validate_metadata(wav: Wav) -> ValidationResult:
    """Validate the ``smpl``, ``acid`` and ``LIST``/``INFO`` metadata.

    This validates:
    - every sampler field fits in an unsigned 32-bit integer
    - the acid tempo is finite and non-negative
    - every INFO tag is exactly 4 single-byte (Latin-1) characters

    Args:
        wav: The WAV value to check.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if wav.sampler is not None:
        for f in fields(wav.sampler):
            value = getattr(wav.sampler, f.name)
            if not 0 <= value <= _UINT32_MAX:
                errors.append(f"sampler.{f.name} must fit in 32 bits, got {value}")

    if wav.acid is not None:
        if not np.isfinite(wav.acid.bpm):
            errors.append(f"acid.bpm must be finite, got {wav.acid.bpm}")
        elif wav.acid.bpm < 0:
            errors.append(f"acid.bpm must be >= 0, got {wav.acid.bpm}")

    if wav.info is not None:
        for i, chunk in enumerate(wav.info.chunks):
            if len(chunk.tag) != 4 or any(ord(c) > 0xFF for c in chunk.tag):
                errors.append(
                    f"info.chunks[{i}].tag must be 4 single-byte characters, got {chunk.tag!r}"
                )
        if not wav.info.chunks:
            warnings.append("info has no entries, an empty LIST chunk will be written")

    if errors:
        return ValidationResult.failure(errors, warnings)
    return ValidationResult.success(warnings)


def validate_audio_data(wav: Wav) -> ValidationResult:
    """Validate the sample rate and channel data.

    This validates:
    - sample_rate > 0 and fits in 32 bits
    - samples are finite (no NaN/Inf)
    - channels have equal lengths (warning only, shorter ones are zero-padded)
    - integer formats stay within [-1, 1] (warning only, values are clamped)

    Args:
        wav: The WAV value to check.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not 0 < wav.sample_rate <= _UINT32_MAX:
        errors.append(f"sample_rate must be a positive 32-bit integer, got {wav.sample_rate}")

    if not wav.channels:
        warnings.append("No channels, the data chunk will be empty")

    lengths = {len(channel) for channel in wav.channels}
    if len(lengths) > 1:
        warnings.append(
            f"Channels have different lengths {sorted(lengths)}, "
            f"shorter channels will be zero-padded"
        )

    for i, channel in enumerate(wav.channels):
        if not np.all(np.isfinite(channel)):
            nan_count = int(np.sum(np.isnan(channel)))
            inf_count = int(np.sum(np.isinf(channel)))
            errors.append(
                f"Channel {i}: contains non-finite values ({nan_count} NaN, {inf_count} Inf)"
            )
            continue

        if not wav.format.is_float and len(channel) and np.max(np.abs(channel)) > 1.0:
            max_abs = float(np.max(np.abs(channel)))
            warnings.append(
                f"Channel {i}: samples exceed [-1, 1] range and will be clamped, "
                f"max |sample| = {max_abs:.4f}"
            )

    if errors:
        return ValidationResult.failure(errors, warnings)
    return ValidationResult.success(warnings)


def validate_wav(wav: Wav) -> ValidationResult:
    """Run both metadata and audio validation and merge the results."""
    meta = validate_metadata(wav)
    audio = validate_audio_data(wav)
    errors = meta.errors + audio.errors
    warnings = meta.warnings + audio.warnings
    if errors:
        return ValidationResult.failure(errors, warnings)
    return ValidationResult.success(warnings)
