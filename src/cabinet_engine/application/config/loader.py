"""Catalog file loading.

Every way loading can fail (missing or unreadable file, malformed JSON,
schema violations) surfaces as one ConfigError whose ``error_type`` says
which stage failed and whose ``details`` locate the problem.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from cabinet_engine.application.config.schema import CatalogConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """A catalog that cannot be loaded, validated or resolved.

    Attributes:
        message: Human-readable summary, possibly multi-line.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation, reference.
        path: Catalog file, when the catalog came from a file.
        details: One dict per problem. JSON errors carry line, column and
            message; schema and reference errors carry path and message.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location as ``models[0].default_width``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _schema_error(error: PydanticValidationError, path: Path | None) -> ConfigError:
    details = [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    lines = ["Catalog validation failed:"]
    for detail in details:
        value = detail["value"]
        shown = "" if value is None or isinstance(value, (dict, list)) else f" (got: {value!r})"
        lines.append(f"  - {detail['path']}: {detail['message']}{shown}")
    return ConfigError(
        message="\n".join(lines),
        error_type="validation",
        path=path,
        details=details,
    )


def _validate(data: Any, path: Path | None) -> CatalogConfiguration:
    try:
        catalog = CatalogConfiguration.model_validate(data)
    except PydanticValidationError as e:
        raise _schema_error(e, path) from None
    logger.debug(
        "Loaded catalog %s: %d materials, %d models, %d projects",
        path or "<dict>",
        len(catalog.materials),
        len(catalog.models),
        len(catalog.projects),
    )
    return catalog


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Catalog file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading catalog file: {path}",
            error_type="permission_denied",
            path=path,
        ) from None
    except OSError as e:
        raise ConfigError(
            message=f"Error reading catalog file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e


def load_catalog(path: Path) -> CatalogConfiguration:
    """Read, parse and validate a JSON catalog file.

    Raises:
        ConfigError: With error_type file_not_found, permission_denied,
            file_read_error, json_parse or validation.

    Example:
        >>> try:
        ...     config = load_catalog(Path("catalog.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(detail)
    """
    path = Path(path)
    content = _read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in catalog file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from None
    return _validate(data, path)


def load_catalog_from_dict(data: dict[str, Any]) -> CatalogConfiguration:
    """Validate an already parsed catalog, e.g. an API request body.

    Raises:
        ConfigError: With error_type validation.
    """
    return _validate(data, None)
