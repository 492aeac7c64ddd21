"""Step content loading.

Each unlocked step of an assessment ships a ``steps/step-NN.json`` file whose
``instructions`` field is written in the stepmark dialect. This module reads
those files into StepContent records and parses their instructions.

A step file that is missing, unreadable or malformed never breaks the caller:
load_step() logs a warning and returns None so the surrounding page can show
a fallback message instead.

Example:
    >>> loader = StepLoader("site/steps")
    >>> step = loader.get(1)
    >>> html = render(step.document()) if step else "Step content could not be loaded."

Thread Safety:
    StepContent is frozen. StepLoader keeps a per-instance dict cache and is
    not thread-safe.

"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from stepmark.errors import StepContentError
from stepmark.utils.logger import get_logger

if TYPE_CHECKING:
    from stepmark.cache import ParseCache
    from stepmark.nodes import Document

logger = get_logger(__name__)


def step_filename(number: int) -> str:
    """Return the file name for a step number.

    Example:
        >>> step_filename(3)
        'step-03.json'
    """
    return f"step-{number:02d}.json"


@dataclass(frozen=True, slots=True)
class StepContent:
    """Content of one step as stored in its JSON file.

    Attributes:
        tier: Difficulty tier label (e.g. "Fundamentals")
        estimated_time: Human readable time estimate
        points: Points awarded for the step
        objectives: Plain-text objective lines
        instructions: Step body in the stepmark dialect
        deliverables: Plain-text deliverable lines
        hints: Plain-text hint lines
        source_file: Path the content was loaded from (optional)

    """

    tier: str = ""
    estimated_time: str = ""
    points: int = 0
    objectives: tuple[str, ...] = ()
    instructions: str = ""
    deliverables: tuple[str, ...] = ()
    hints: tuple[str, ...] = ()
    source_file: str | None = None

    @classmethod
    def from_dict(cls, data: Any, *, source_file: str | None = None) -> StepContent:
        """Build StepContent from a decoded step JSON document.

        Missing or null fields fall back to their defaults; unknown keys are
        ignored.

        Raises:
            StepContentError: If the payload is not an object or a field has
                the wrong type.

        """
        if not isinstance(data, dict):
            msg = f"Expected a JSON object, got {type(data).__name__}"
            raise StepContentError(msg, source_file=source_file)

        points = data.get("points") or 0
        if isinstance(points, bool) or not isinstance(points, int):
            msg = f"Expected an integer, got {type(points).__name__}"
            raise StepContentError(msg, field="points", source_file=source_file)

        return cls(
            tier=_string_field(data, "tier", source_file),
            estimated_time=_string_field(data, "estimated_time", source_file),
            points=points,
            objectives=_lines_field(data, "objectives", source_file),
            instructions=_string_field(data, "instructions", source_file),
            deliverables=_lines_field(data, "deliverables", source_file),
            hints=_lines_field(data, "hints", source_file),
            source_file=source_file,
        )

    def document(self, *, cache: ParseCache | None = None) -> Document:
        """Parse the instructions into a Document."""
        from stepmark import parse

        return parse(self.instructions, source_file=self.source_file, cache=cache)


def _string_field(data: dict[str, Any], name: str, source_file: str | None) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"Expected a string, got {type(value).__name__}"
        raise StepContentError(msg, field=name, source_file=source_file)
    return value


def _lines_field(
    data: dict[str, Any], name: str, source_file: str | None
) -> tuple[str, ...]:
    value = data.get(name)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = "Expected a list of strings"
        raise StepContentError(msg, field=name, source_file=source_file)
    return tuple(value)


def load_step(path: str | Path) -> StepContent | None:
    """Load a step file.

    Args:
        path: Path to a ``step-NN.json`` file

    Returns:
        StepContent, or None if the file cannot be read or is malformed
        (a warning is logged).

    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        return StepContent.from_dict(data, source_file=str(path))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load step content from %s: %s", path, e)
    except json.JSONDecodeError as e:
        logger.warning("Step content in %s is not valid JSON: %s", path, e)
    except StepContentError as e:
        logger.warning("Malformed step content: %s", e)
    return None


class StepLoader:
    """Load step files from a directory, remembering successful loads.

    Failed loads are not cached, so a step file that appears later is picked
    up on the next call.

    """

    __slots__ = ("_directory", "_loaded")

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)
        self._loaded: dict[int, StepContent] = {}

    def path_for(self, number: int) -> Path:
        return self._directory / step_filename(number)

    def get(self, number: int) -> StepContent | None:
        """Return the content of step ``number``, or None if unavailable."""
        cached = self._loaded.get(number)
        if cached is not None:
            return cached
        content = load_step(self.path_for(number))
        if content is not None:
            self._loaded[number] = content
        return content

    def clear(self) -> None:
        self._loaded.clear()
