"""JSON schemas for the bundled reference catalogs."""

from installer_l10n.config.schemas.validator import (
    CatalogValidator,
    SchemaValidationError,
)

__all__ = ["CatalogValidator", "SchemaValidationError"]
