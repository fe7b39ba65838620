"""Exporter protocol, format registry and multi-format writer for cutting layouts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, ClassVar, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cabinet_engine.infrastructure.bin_packing import CuttingLayout


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """A cutting layout writer for one file format.

    Attributes:
        format_name: Registry key, e.g. "dxf".
        file_extension: Extension of written files, without the dot.
        media_type: MIME type of the exported content.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    def export(self, layout: CuttingLayout, path: Path) -> None: ...

    def export_string(self, layout: CuttingLayout) -> str: ...


ExporterFactory = Callable[[], Exporter]


class ExporterRegistry:
    """Maps format names to exporter classes.

    Exporter modules register their class at import time::

        @ExporterRegistry.register("svg")
        class SvgExporter:
            ...

    The package ``__init__`` imports every exporter module, so importing
    ``cabinet_engine.infrastructure.exporters`` fills the registry.
    """

    _exporters: ClassVar[dict[str, type]] = {}

    @classmethod
    def register(cls, format_name: str) -> Callable[[type], type]:
        def decorator(exporter_class: type) -> type:
            previous = cls._exporters.get(format_name)
            if previous is not None and previous is not exporter_class:
                logger.warning(
                    "Format '%s' re-registered: %s replaces %s",
                    format_name,
                    exporter_class.__name__,
                    previous.__name__,
                )
            cls._exporters[format_name] = exporter_class
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type:
        """Exporter class registered for ``format_name``.

        Raises:
            KeyError: If the format is unknown; the message lists the
                registered formats.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            available = ", ".join(cls.available_formats()) or "none"
            raise KeyError(
                f"Unknown export format '{format_name}'. Available formats: {available}"
            ) from None

    @classmethod
    def create(cls, format_name: str) -> Exporter:
        return cls.get(format_name)()

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes one cutting layout in several formats into a directory.

    Files are named ``{project_name}.{extension}``.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: Iterable[str],
        layout: CuttingLayout,
        project_name: str = "cutting_layout",
    ) -> dict[str, Path]:
        """Export ``layout`` once per format.

        Every format is looked up before anything is written, so an
        unknown format leaves the directory untouched.

        Returns:
            Written file per format name.

        Raises:
            KeyError: If a format is not registered.
        """
        exporters = {name: ExporterRegistry.create(name) for name in formats}
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for name, exporter in exporters.items():
            path = self.output_dir / f"{project_name}.{exporter.file_extension}"
            exporter.export(layout, path)
            logger.info("Wrote %s layout to %s", name, path)
            written[name] = path
        return written
