"""Config file locator for finding config across environments."""
import logging
from pathlib import Path
from typing import List, Optional, Union

from configor.exceptions.config import ConfigNotFoundError
from configor.settings import current_environment


logger = logging.getLogger(__name__)

EXAMPLE_SUFFIX = "example"

PathLike = Union[str, Path]


def with_suffix_name(path: PathLike, suffix: str) -> Path:
    """Insert `.suffix` before the extension, or append it when there is none.

    The extension is everything from the last dot of the file name, so a
    dotfile such as ".env" is all extension.

    Example:
        with_suffix_name("config/app.yml", "production") -> config/app.production.yml
        with_suffix_name("config/app", "test") -> config/app.test
        with_suffix_name("config/.env", "test") -> config/.test.env
    """
    path = Path(path)
    stem, dot, extension = path.name.rpartition(".")
    if dot:
        return path.with_name(f"{stem}.{suffix}.{extension}")
    return path.with_name(f"{path.name}.{suffix}")


class ConfigLocator:
    """Locates configuration files for an environment.

    Search order per reference:
    1. Base config: {name}.{ext}
    2. Environment-specific config: {name}.{env}.{ext} (loaded after the base)
    3. Example fallback: {name}.example.{ext}, only if neither of the above exists

    References are evaluated in reverse order, so the first reference given
    is merged last and wins.
    """

    def __init__(self, environment: str):
        """Initialize config locator.

        Args:
            environment: Environment name used for the suffixed variant
        """
        self.environment = environment

        logger.debug(
            "ConfigLocator initialized",
            extra={"environment": environment},
        )

    def find_config_paths(self, reference: PathLike) -> List[Path]:
        """Find the files to load for a single reference.

        Args:
            reference: Base file reference (e.g., "config/database.yml")

        Returns:
            Paths to load, most general first

        Raises:
            ConfigNotFoundError: If no base, environment or example file exists
        """
        base_path = Path(reference)
        env_path = with_suffix_name(base_path, self.environment)
        found: List[Path] = []

        if base_path.is_file():
            found.append(base_path)

        if env_path.is_file():
            logger.debug(
                f"Found environment config: {env_path}",
                extra={"reference": str(reference), "environment": self.environment, "path": str(env_path)},
            )
            found.append(env_path)

        if found:
            return found

        example_path = with_suffix_name(base_path, EXAMPLE_SUFFIX)
        if example_path.is_file():
            logger.info(
                f"Config {reference} not found, using example file {example_path}",
                extra={"reference": str(reference), "path": str(example_path)},
            )
            return [example_path]

        searched_paths = [str(base_path), str(env_path), str(example_path)]
        logger.debug(
            f"Config file not found: {reference}",
            extra={"reference": str(reference), "searched_paths": searched_paths},
        )
        raise ConfigNotFoundError(
            message=f"Failed to find configuration {reference}",
            config_name=str(reference),
            searched_paths=searched_paths,
        )

    def resolve(self, *references: PathLike) -> List[Path]:
        """Resolve references into the ordered list of files to merge.

        Args:
            *references: Base file references, highest priority first

        Returns:
            Concrete paths in merge order (later files override earlier ones)
        """
        results: List[Path] = []

        for reference in reversed(references):
            results.extend(self.find_config_paths(reference))

        logger.debug(
            "Resolved configuration files",
            extra={"environment": self.environment, "files": [str(p) for p in results]},
        )
        return results


def find_config_paths(*references: PathLike, environment: Optional[str] = None) -> List[Path]:
    """Convenience function to resolve config files.

    Args:
        *references: Base file references
        environment: Environment name (defaults to the current environment)

    Returns:
        Paths in merge order
    """
    if environment is None:
        environment = current_environment()
    locator = ConfigLocator(environment)
    return locator.resolve(*references)
