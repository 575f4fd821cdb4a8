"""Show configuration command."""

from collections.abc import Iterator

from ..StageResult import StageResult
from .LaunchdeckConfig import LaunchdeckConfig


def cmd_show(section: str = "") -> StageResult:
    """Show configuration section or the whole configuration.

    Args:
        section: Section name. Empty string returns every section.
    """

    def do_work(result_obj: StageResult) -> Iterator[tuple[float, str]]:
        yield (0.3, "Loading configuration...")
        try:
            config = LaunchdeckConfig.load()
        except ValueError as e:
            yield (1.0, "Complete")
            result_obj.finish(
                f"Error loading configuration: {e}",
                {
                    "errors": [str(e)],
                    "warnings": [],
                    "section": section,
                    "content": {},
                    "config_path": str(LaunchdeckConfig.get_config_path()),
                },
                False,
            )
            return

        yield (0.6, "Processing sections...")
        config_dict = config.to_dict()
        warnings: list[str] = []
        if not LaunchdeckConfig.get_config_path().exists():
            warnings.append("No config file found; showing defaults")

        if section and section not in config_dict:
            yield (1.0, "Complete")
            result_obj.finish(
                f"Section '{section}' not found",
                {
                    "errors": [f"Unknown section: {section} (available: {', '.join(config_dict)})"],
                    "warnings": warnings,
                    "section": section,
                    "content": {},
                    "config_path": str(config.get_config_path()),
                },
                False,
            )
            return

        yield (1.0, "Complete")
        result_obj.finish(
            f"Retrieved configuration for '{section}'" if section else "Retrieved configuration",
            {
                "errors": [],
                "warnings": warnings,
                "section": section,
                "content": config_dict[section] if section else config_dict,
                "config_path": str(config.get_config_path()),
            },
            True,
        )

    announce = f"Showing configuration for section '{section}'..." if section else "Showing configuration..."
    return StageResult(announce=announce, progress_callback=do_work)
