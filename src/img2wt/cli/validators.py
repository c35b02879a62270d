from img2wt.types import MAX_TABLE_ROWS


def validate_positive_integer(type_: object, value: int) -> None:
    if value <= 0:
        raise ValueError("Value must be a positive integer")


def validate_non_negative_integer(type_: object, value: int | None) -> None:
    if value is not None and value < 0:
        raise ValueError("Value must be zero or a positive integer")


def validate_table_rows(type_: object, value: int) -> None:
    """Validate the wavetable row count."""
    if not 1 <= value <= MAX_TABLE_ROWS:
        raise ValueError(f"Table rows must be between 1 and {MAX_TABLE_ROWS}")
