"""Reporter class registration and discovery."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ton_dump_processor.reporters import Reporter


class ReporterRegistry:
    """Singleton class for report-emitter class registration."""

    _reporter_class_defs: list[type["Reporter"]] = []

    @classmethod
    def register(cls, class_def: type["Reporter"]) -> type["Reporter"]:
        """Register reporter class so every run emits its artifacts."""
        if class_def not in cls._reporter_class_defs:
            cls._reporter_class_defs.append(class_def)
        return class_def

    @classmethod
    def ls(cls) -> list[type["Reporter"]]:
        """Return registered reporter classes sorted by display name."""
        return sorted(
            cls._reporter_class_defs,
            key=lambda class_def: class_def.name().casefold(),
        )
