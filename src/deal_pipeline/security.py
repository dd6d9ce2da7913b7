import re
import tempfile
import unicodedata
from pathlib import Path
from typing import Iterable, Optional


_ANGLE_RE = re.compile(r"[<>]")

# Leading characters a spreadsheet treats as the start of a formula.
_FORMULA_STARTERS = ("=", "+", "-", "@", "\t", "\r")
# Right-to-left and left-to-right overrides, plus NUL.
_UNSAFE_PATH_CHARS = (chr(0x202E), chr(0x202D), chr(0))


def _within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def safe_output_path(
    path_str: str,
    base: Path,
    suffixes: Optional[Iterable[str]] = None,
) -> Path:
    """Resolve where the CLI may write an export or import result.

    The target must sit under ``base`` (the working directory) or the system
    temp directory, must not be reached through ``..`` or a symlink, needs an
    existing parent directory and, when ``suffixes`` is given, one of those
    file extensions.
    """
    if not path_str or not path_str.strip():
        raise ValueError("output path required")
    text = unicodedata.normalize("NFKC", path_str.strip())
    if any(ch in text for ch in _UNSAFE_PATH_CHARS):
        raise ValueError("unsafe characters in path")
    candidate = Path(text)
    if ".." in candidate.parts:
        raise ValueError("path traversal not allowed")

    base = base.resolve()
    lexical = candidate if candidate.is_absolute() else base / candidate
    if lexical.is_symlink():
        raise ValueError("symlink paths not allowed")
    resolved = lexical.resolve()

    roots = (base, Path(tempfile.gettempdir()).resolve())
    if not any(_within(resolved, root) for root in roots):
        raise ValueError("path outside allowed roots")
    if not resolved.parent.is_dir():
        raise ValueError(f"output directory does not exist: {resolved.parent}")

    if suffixes:
        allowed = tuple(s.lower() for s in suffixes)
        if resolved.suffix.lower() not in allowed:
            raise ValueError(f"output file must end with {' or '.join(allowed)}")
    return resolved


def neutralize_csv_field(value):
    """Quote-prefix text a spreadsheet would evaluate as a formula.

    Leading spaces are looked through, since spreadsheets ignore them too.
    """
    text = "" if value is None else str(value)
    if text.lstrip(" ").startswith(_FORMULA_STARTERS):
        return "'" + text
    return text


def sanitize_input(value):
    """Trim form text and drop angle brackets; non-strings pass through."""
    if not isinstance(value, str):
        return value
    return _ANGLE_RE.sub("", value.strip())
