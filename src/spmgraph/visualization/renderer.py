"""Graph rendering using Graphviz."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Union

import graphviz

from ..core.exceptions import RendererFailed, RendererNotFound
from ..core.models import OutputFormat

logger = logging.getLogger(__name__)

Pipe = Callable[[str, str, str], bytes]
Which = Callable[[str], Optional[str]]

ENGINES = ["dot", "neato", "fdp", "sfdp", "circo", "twopi"]


def current_umask() -> int:
    """Return the process umask; it can only be read by setting it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def graphviz_pipe(dot_content: str, output_format: str, engine: str) -> bytes:
    """Run Graphviz on ``dot_content`` and return the rendered bytes.

    Raises:
        RendererNotFound: If the engine executable cannot be started.
        RendererFailed: If Graphviz exits with a non-zero status.
    """
    source = graphviz.Source(dot_content, engine=engine)
    try:
        return source.pipe(format=output_format, quiet=True)
    except graphviz.ExecutableNotFound as e:
        raise RendererNotFound(engine) from e
    except graphviz.CalledProcessError as e:
        stderr = e.stderr or b""
        if isinstance(stderr, bytes):
            stderr = stderr.decode("utf-8", errors="replace")
        raise RendererFailed(engine, stderr.strip()) from e


class GraphRenderer:
    """Renders DOT language to files, using Graphviz for image formats."""

    def __init__(
        self,
        engine: str = "dot",
        pipe: Optional[Pipe] = None,
        which: Optional[Which] = None,
    ):
        """Initialize renderer.

        Args:
            engine: Graphviz engine to use (dot, neato, fdp, sfdp, circo, twopi).
            pipe: Callable taking DOT text, output format and engine and
                returning the rendered bytes. Defaults to :func:`graphviz_pipe`.
            which: Executable lookup. Defaults to :func:`shutil.which`.
        """
        if engine not in ENGINES:
            raise ValueError(f"Unknown Graphviz engine '{engine}'. Choose from: {', '.join(ENGINES)}")
        self.engine = engine
        self.pipe = pipe or graphviz_pipe
        self.which = which or shutil.which

    def is_available(self) -> bool:
        """Whether the configured Graphviz engine is installed."""
        return self.which(self.engine) is not None

    def render(self, dot_content: str, output_file: Union[str, Path]) -> Path:
        """Render DOT content to the format given by the file extension.

        Args:
            dot_content: DOT language content.
            output_file: Output file path.

        Returns:
            Path to the generated file.

        Raises:
            UnsupportedExtension: If the extension maps to no known format.
            RendererNotFound: If an image is requested and Graphviz is missing.
            RendererFailed: If Graphviz fails or produces no output.
        """
        output_path = Path(output_file)
        output_format = OutputFormat.from_path(output_path)

        logger.info(f"Rendering graph to {output_format.value} format")
        data = self.render_to_bytes(dot_content, output_format)
        self._write_atomically(output_path, data)

        logger.info(f"Graph rendered successfully to: {output_path}")
        return output_path

    def render_to_bytes(self, dot_content: str, output_format: OutputFormat) -> bytes:
        """Render DOT content to bytes for in-memory usage.

        Args:
            dot_content: DOT language content.
            output_format: Output format.

        Returns:
            Rendered graph as bytes.
        """
        if not output_format.is_image:
            return dot_content.encode("utf-8")

        if not self.is_available():
            raise RendererNotFound(self.engine)

        data = self.pipe(dot_content, output_format.value, self.engine)
        if not data:
            raise RendererFailed(self.engine, "no output produced")
        return data

    def get_available_engines(self) -> List[str]:
        """Get list of available Graphviz layout engines.

        Returns:
            List of available engine names.
        """
        return [engine for engine in ENGINES if self.which(engine)]

    def _write_atomically(self, output_path: Path, data: bytes) -> None:
        """Write ``data`` to a temporary file beside ``output_path`` and move it into place."""
        directory = output_path.parent
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            dir=directory,
        )
        try:
            with os.fdopen(fd, "wb") as temp_file:
                temp_file.write(data)
            # mkstemp creates the file owner-only
            os.chmod(temp_name, 0o666 & ~current_umask())
            os.replace(temp_name, output_path)
        except BaseException:
            if os.path.exists(temp_name):
                os.unlink(temp_name)
            raise
