from riffwav.cli.formats import FORMAT_NAMES


def validate_positive_integer(type_: object, value: int | None) -> None:
    """Validate that an optional integer is greater than zero."""
    if value is None:
        return

    if value <= 0:
        raise ValueError("Value must be a positive integer")


def validate_format_name(type_: object, name: str | None) -> None:
    if not name:
        return

    if name.lower() not in FORMAT_NAMES:
        raise ValueError(f"Unknown sample format {name!r}, expected one of {', '.join(FORMAT_NAMES)}")
