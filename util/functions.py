# util/functions.py
import os
from typing import Callable, List, Sequence, TypeVar, Union

T = TypeVar("T")


def _split_numeric(raw: str) -> List[str]:
    """
    - Strip quotes and spaces the upstream CSV writer leaves around lists.
    - Split on commas; an empty string yields no tokens.
    """
    s = raw.replace('"', "").replace(" ", "")
    if not s:
        return []
    return s.split(",")


def _parse_list(raw: Union[str, Sequence], cast: Callable[[str], T]) -> List[T]:
    if isinstance(raw, str):
        tokens = _split_numeric(raw)
    else:
        tokens = list(raw)
    out: List[T] = []
    for tok in tokens:
        try:
            out.append(cast(tok))
        except (TypeError, ValueError):
            raise ValueError(f"invalid numeric value {tok!r}") from None
    return out


def parse_float_list(raw: Union[str, Sequence[float]]) -> List[float]:
    """Parse `"0, 188,376"` (or an already-split sequence) into floats."""
    return _parse_list(raw, float)


def _to_int(tok) -> int:
    if isinstance(tok, float):
        if not tok.is_integer():
            raise ValueError(tok)
        return int(tok)
    return int(tok)


def parse_int_list(raw: Union[str, Sequence[int]]) -> List[int]:
    """Parse a comma-delimited length list into ints; fractional values are rejected."""
    return _parse_list(raw, _to_int)


def resolve_under(base_dir: str, path: str) -> str:
    """
    Join `path` onto `base_dir` and return the real path.
    Raises ValueError when the result (symlinks followed) leaves `base_dir`.
    """
    base = os.path.realpath(base_dir)
    resolved = os.path.realpath(os.path.join(base, path))
    if os.path.commonpath([base, resolved]) != base:
        raise ValueError(f"path {path!r} escapes {base_dir!r}")
    return resolved
