import logging
import os

_logger = logging.getLogger("tabula")
_logger.addHandler(logging.NullHandler())

_DEFAULT_PRINT_OPTIONS = {"max_rows": 8, "max_columns": 8, "precision": 4}
_PRINT_ENV = {
    "max_rows": "TABULA_PRINT_MAX_ROWS",
    "max_columns": "TABULA_PRINT_MAX_COLUMNS",
    "precision": "TABULA_PRINT_PRECISION",
}


def _print_option_from_env(name):
    env = os.environ.get(_PRINT_ENV[name])
    if env:
        try:
            value = int(env)
        except ValueError:
            value = 0
        if value > 0:
            return value
        _logger.warning("ignoring invalid %s=%r", _PRINT_ENV[name], env)
    return _DEFAULT_PRINT_OPTIONS[name]


_print_options = {name: _print_option_from_env(name) for name in _DEFAULT_PRINT_OPTIONS}


def set_print_options(max_rows=None, max_columns=None, precision=None) -> None:
    """Set how many rows/columns ``str(matrix)`` shows and its precision.

    Options left as ``None`` keep their current value.
    """
    updates = {}
    for name, value in (
        ("max_rows", max_rows),
        ("max_columns", max_columns),
        ("precision", precision),
    ):
        if value is None:
            continue
        value = int(value)
        if value <= 0:
            raise ValueError(f"{name} must be positive")
        updates[name] = value
    _print_options.update(updates)


def get_print_options() -> dict:
    return dict(_print_options)


def set_log_level(level) -> None:
    """Set the level of the ``tabula`` logger (an int or a level name)."""
    if isinstance(level, str):
        level = level.upper()
    _logger.setLevel(level)


def get_log_level() -> int:
    return _logger.level


_env_level = os.environ.get("TABULA_LOG_LEVEL")
if _env_level:
    try:
        set_log_level(_env_level)
    except ValueError:
        _logger.warning("ignoring invalid TABULA_LOG_LEVEL=%r", _env_level)
