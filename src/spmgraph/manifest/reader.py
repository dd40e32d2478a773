"""Swift package description reader."""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from ..core.exceptions import ManifestUnavailable
from ..core.models import PackageDescription

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "Package.swift"

Runner = Callable[..., subprocess.CompletedProcess]


class ManifestReader:
    """Reads a package description from a Swift package or a captured JSON file."""

    def __init__(self, swift_executable: str = "swift", runner: Optional[Runner] = None):
        """Initialize manifest reader.

        Args:
            swift_executable: Swift toolchain executable used for ``package describe``.
            runner: Callable with the ``subprocess.run`` signature. Defaults to
                ``subprocess.run``.
        """
        self.swift_executable = swift_executable
        self.runner = runner or subprocess.run

    def read(self, path: Union[str, Path]) -> PackageDescription:
        """Read the package description at ``path``.

        Args:
            path: Package root directory, or a ``.json`` file holding the output
                of ``swift package describe --type json``.

        Returns:
            Parsed package description.

        Raises:
            ManifestUnavailable: If no valid description can be obtained.
        """
        package_path = Path(path)

        if not package_path.exists():
            raise ManifestUnavailable(package_path, "path does not exist")

        if package_path.is_file():
            if package_path.suffix.lower() != ".json":
                raise ManifestUnavailable(
                    package_path,
                    "expected a package directory or a .json package description",
                )
            logger.info(f"Reading package description from {package_path}")
            try:
                content = package_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ManifestUnavailable(package_path, str(e)) from e
        else:
            content = self._describe(package_path)

        return self.parse(content, package_path)

    def parse(self, content: str, source: Union[str, Path] = "<string>") -> PackageDescription:
        """Parse ``swift package describe`` JSON output.

        Anything printed before the JSON document (fetch or build progress)
        is skipped.
        """
        start = content.find("{")
        if start < 0:
            raise ManifestUnavailable(source, "no JSON package description found")

        try:
            package = PackageDescription.model_validate_json(content[start:])
        except ValidationError as e:
            raise ManifestUnavailable(source, f"malformed package description: {e}") from e

        logger.info(
            f"Package '{package.name}' has {len(package.targets)} targets "
            f"and {len(package.products)} products",
        )
        return package

    def _describe(self, package_path: Path) -> str:
        """Run ``swift package describe`` in the package directory."""
        if not (package_path / MANIFEST_FILENAME).is_file():
            raise ManifestUnavailable(package_path, f"no {MANIFEST_FILENAME} found")

        command = self._describe_command()
        logger.info(f"Running '{' '.join(command)}' in {package_path}")

        try:
            result = self.runner(
                command,
                cwd=str(package_path),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise ManifestUnavailable(
                package_path,
                f"Swift toolchain '{self.swift_executable}' not found",
            ) from e
        except UnicodeDecodeError as e:
            raise ManifestUnavailable(
                package_path,
                f"'{' '.join(command)}' produced output that is not valid UTF-8",
            ) from e
        except OSError as e:
            raise ManifestUnavailable(package_path, str(e)) from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ManifestUnavailable(
                package_path,
                f"'{' '.join(command)}' exited with status {result.returncode}"
                + (f": {stderr}" if stderr else ""),
            )

        return result.stdout or ""

    def _describe_command(self) -> List[str]:
        return [self.swift_executable, "package", "describe", "--type", "json"]
