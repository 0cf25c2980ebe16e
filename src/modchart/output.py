"""Output sinks for rendered flowcharts."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

logger = logging.getLogger(__name__)


class OutputSink(ABC):
    """Base class for flowchart output sinks."""

    @abstractmethod
    def write(self, path: Path, text: str) -> None:
        """Persist ``text`` at ``path``.

        Raises:
            OSError: If the text cannot be written
            ValueError: If the text cannot be encoded
        """
        pass


class FileSink(OutputSink):
    """Writes flowcharts as UTF-8 text files."""

    def __init__(self, create_dirs: bool = True):
        self.create_dirs = create_dirs

    def write(self, path: Path, text: str) -> None:
        path = Path(path)
        # Encode up front so an unencodable diagram never truncates the file.
        data = text.encode("utf-8")

        if self.create_dirs:
            path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            f.write(data)

        logger.debug(f"Wrote {len(data)} bytes to {path}")
