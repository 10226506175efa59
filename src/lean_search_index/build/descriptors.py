"""Discovery and decoding of doc-gen4 descriptor files.

A descriptor that cannot be read or does not match the expected schema is
reported and skipped; the rest of the batch is still indexed.
"""

import glob
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)

from lean_search_index.config import Config
from lean_search_index.models import ModuleDescriptor

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """Outcome of decoding one descriptor file."""

    path: Path
    """File the descriptor was read from."""

    descriptor: ModuleDescriptor | None = None
    """Decoded descriptor, if decoding succeeded."""

    error: str | None = None
    """Human-readable reason decoding failed."""

    @property
    def ok(self) -> bool:
        """Whether the file decoded successfully."""
        return self.descriptor is not None


def default_descriptor_patterns(output_root: Path) -> list[str]:
    """Return the descriptor glob for the documentation under ``output_root``."""
    return [str(output_root / Config.DESCRIPTOR_GLOB)]


def expand_patterns(patterns: list[str]) -> list[Path]:
    """Expand glob patterns into a sorted list of distinct regular files.

    Patterns support ``**`` for recursive matching.
    """
    paths = set()
    for pattern in patterns:
        matches = [Path(match) for match in glob.glob(pattern, recursive=True)]
        files = [path for path in matches if path.is_file()]
        if not files:
            logger.warning(f"No files matched pattern {pattern}")
        paths.update(files)
    return sorted(paths)


def decode_descriptor(path: Path) -> DecodeResult:
    """Read and validate one descriptor file.

    Args:
        path: Path to a doc-gen4 module descriptor (JSON).

    Returns:
        A DecodeResult holding either the descriptor or the failure reason.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        return DecodeResult(path=path, error=f"could not read file: {e}")

    try:
        descriptor = ModuleDescriptor.model_validate_json(raw)
    except ValidationError as e:
        return DecodeResult(
            path=path, error=f"invalid descriptor ({e.error_count()} errors): {e}"
        )

    return DecodeResult(path=path, descriptor=descriptor)


def load_descriptors(
    paths: list[Path],
) -> tuple[list[ModuleDescriptor], list[DecodeResult]]:
    """Decode every descriptor file, skipping the ones that fail.

    Args:
        paths: Descriptor files to decode.

    Returns:
        Tuple of (descriptors, failures).
    """
    descriptors = []
    failures = []

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeRemainingColumn(),
    ) as progress:
        task = progress.add_task("[cyan]Decoding descriptors...", total=len(paths))

        for path in paths:
            result = decode_descriptor(path)
            if result.ok:
                descriptors.append(result.descriptor)
            else:
                logger.warning(f"Skipping {path}: {result.error}")
                failures.append(result)
            progress.update(task, advance=1)

    logger.info(
        f"Decoded {len(descriptors)} of {len(paths)} descriptor files "
        f"({len(failures)} skipped)"
    )
    return descriptors, failures
