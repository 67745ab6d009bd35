MIN_SIZE = 5
DEFAULT_ROWS = 21
DEFAULT_COLS = 21


class InvalidDimensionsError(ValueError):
    """Grid dimensions are even or below the 5x5 minimum.

    ``field`` names the first offending dimension ("rows" or "cols").
    """

    def __init__(self, rows: int, cols: int, reason: str, field: str = "rows"):
        super().__init__(f"invalid maze size {rows}x{cols}: {reason}")
        self.rows = rows
        self.cols = cols
        self.reason = reason
        self.field = field


def validate_dimensions(rows: int, cols: int) -> None:
    dims = (("rows", rows), ("cols", cols))
    for field, value in dims:
        if not isinstance(value, int) or isinstance(value, bool):
            raise InvalidDimensionsError(rows, cols, "dimensions must be integers", field)
    for field, value in dims:
        if value < MIN_SIZE:
            raise InvalidDimensionsError(rows, cols, f"minimum is {MIN_SIZE}x{MIN_SIZE}", field)
    for field, value in dims:
        if value % 2 == 0:
            raise InvalidDimensionsError(rows, cols, "both dimensions must be odd", field)


__all__ = ["InvalidDimensionsError", "validate_dimensions", "MIN_SIZE"]
