"""JSON Schema validation for reference catalog files."""

from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft7Validator, ValidationError
from jsonschema.exceptions import best_match

SCHEMA_DIR = Path(__file__).parent
SCHEMA_PATHS: dict[str, Path] = {
    "locales": SCHEMA_DIR / "locales.schema.json",
    "timezones": SCHEMA_DIR / "timezones.schema.json",
    "keymaps": SCHEMA_DIR / "keymaps.schema.json",
}


class SchemaValidationError(Exception):
    """Raised when a catalog does not match its schema."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        schema_type: str | None = None,
    ) -> None:
        """Initialize schema validation error.

        Args:
            message: Error message
            path: JSON path where error occurred
            schema_type: Catalog kind being validated

        """
        self.path = path
        self.schema_type = schema_type
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with path information."""
        parts = []
        if self.schema_type:
            parts.append(f"[{self.schema_type}]")
        if self.path:
            parts.append(f"at '{self.path}'")
        if parts:
            return f"{' '.join(parts)}: {super().__str__()}"
        return super().__str__()


class CatalogValidator:
    """Validates decoded catalog data against the bundled schemas."""

    def __init__(self) -> None:
        """Load every catalog schema and build its validator."""
        self._validators = {
            kind: Draft7Validator(self._load_schema(path))
            for kind, path in SCHEMA_PATHS.items()
        }

    @staticmethod
    def _load_schema(schema_path: Path) -> dict[str, Any]:
        """Load a JSON schema file.

        Raises:
            FileNotFoundError: If the schema file doesn't exist
            ValueError: If the schema JSON is invalid

        """
        if not schema_path.exists():
            msg = f"Schema file not found: {schema_path}"
            raise FileNotFoundError(msg)
        try:
            return orjson.loads(schema_path.read_bytes())  # type: ignore[no-any-return]
        except orjson.JSONDecodeError as e:
            msg = f"Invalid JSON in schema file {schema_path}: {e}"
            raise ValueError(msg) from e

    @staticmethod
    def _format_error(error: ValidationError) -> tuple[str, str]:
        """Return (message, json path) for a jsonschema error."""
        path = (
            ".".join(str(p) for p in error.absolute_path)
            if error.absolute_path
            else "root"
        )
        if error.validator == "required":
            return f"Missing required field: {error.message}", path
        if error.validator == "type":
            actual = type(error.instance).__name__
            return (
                f"Expected type '{error.validator_value}', got '{actual}'",
                path,
            )
        return error.message, path

    def validate(self, kind: str, data: Any) -> None:  # noqa: ANN401
        """Validate catalog ``data`` of the given kind.

        Args:
            kind: One of "locales", "timezones", "keymaps"
            data: Decoded catalog JSON

        Raises:
            KeyError: If ``kind`` has no schema
            SchemaValidationError: If validation fails

        """
        error = best_match(self._validators[kind].iter_errors(data))
        if error is not None:
            message, path = self._format_error(error)
            raise SchemaValidationError(message, path=path, schema_type=kind)
