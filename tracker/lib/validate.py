"""
Schema validation for tracker snapshots.

Every snapshot is checked against its JSON Schema when it is read and
again before it is written, so a malformed file is reported at the boundary
instead of surfacing later as a KeyError deep in the repository.
"""

import json
from pathlib import Path

import jsonschema

from tracker.errors import TrackerError


class ValidationError(TrackerError):
    """Schema validation failed."""

    def __init__(self, schema_name: str, message: str, path: str = None):
        self.schema_name = schema_name
        self.path = path
        super().__init__(f"[{schema_name}] {message}" + (f" at {path}" if path else ""))


_schema_cache: dict[str, dict] = {}


def _get_schemas_dir() -> Path:
    """Schemas ship inside the package."""
    return Path(__file__).parent.parent / "schemas"


def _load_schema(schema_name: str) -> dict:
    """Load schema by name, with caching."""
    if schema_name not in _schema_cache:
        schema_path = _get_schemas_dir() / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise ValidationError(schema_name, f"Schema file not found: {schema_path}")
        _schema_cache[schema_name] = json.loads(schema_path.read_text())
    return _schema_cache[schema_name]


def validate(data: dict, schema_name: str) -> None:
    """
    Validate data against named schema.

    Args:
        data: Decoded JSON document
        schema_name: Schema name (e.g., "snapshot")

    Raises:
        ValidationError: If validation fails
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        raise ValidationError(schema_name, e.message, _error_path(e)) from None


def _error_path(error: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in error.absolute_path) if error.absolute_path else "(root)"


def validate_before_write(data: dict, schema_name: str, filepath: Path) -> None:
    """Refuse to write data that does not match its schema.

    Raises:
        ValidationError: If data doesn't match schema
    """
    schema = _load_schema(schema_name)
    error = jsonschema.exceptions.best_match(
        jsonschema.validators.validator_for(schema)(schema).iter_errors(data)
    )
    if error is not None:
        raise ValidationError(
            schema_name,
            f"Refusing to write invalid data to {filepath}: {error.message}",
            _error_path(error),
        )
