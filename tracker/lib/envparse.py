"""
Parser for tracker.env files.

Reads KEY=value lines without handing anything to a shell, so a config file
cannot run commands or expand variables.
"""

import os
import re
from pathlib import Path

# Values containing any of these are rejected outright
FORBIDDEN_PATTERNS = [
    r'`',
    r'\$\(',
    r'\$\{',
]

KEY_PATTERN = re.compile(r'^[A-Z][A-Z0-9_]*$')


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def parse_env_text(text: str, source: str = "<string>") -> dict[str, str]:
    """
    Parse env-file text into a dict.

    Blank lines and lines starting with '#' are skipped; an optional leading
    'export ' is tolerated.

    Raises:
        ValueError: if a line is malformed or a value uses a forbidden pattern
    """
    result = {}
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()

        key, sep, value = line.partition('=')
        if not sep:
            raise ValueError(f"{source}:{lineno}: missing '='")

        key = key.strip()
        if not KEY_PATTERN.match(key):
            raise ValueError(f"{source}:{lineno}: invalid key '{key}'")

        value = _unquote(value.strip())
        if any(re.search(p, value) for p in FORBIDDEN_PATTERNS):
            raise ValueError(f"{source}:{lineno}: forbidden pattern in value of {key}")

        result[key] = value
    return result


def load_env(filepath: str | Path) -> dict[str, str]:
    """
    Parse an env file, return dict.

    Raises:
        FileNotFoundError: if file doesn't exist
        ValueError: if syntax invalid or forbidden pattern found
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Env file not found: {filepath}")
    return parse_env_text(path.read_text(), source=str(path))


def env_overrides(prefix: str, environ=None) -> dict[str, str]:
    """Collect PREFIX_KEY variables from the process environment, prefix stripped."""
    environ = os.environ if environ is None else environ
    return {
        name[len(prefix):]: value
        for name, value in environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }
