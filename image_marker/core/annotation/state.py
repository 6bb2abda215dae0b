"""
State management for marker sessions.

Contains data classes representing the zoom viewport and the placed
markers of a session.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple, Union


MIN_SCALE = 1.0
MAX_SCALE = 3.0
STEP_SCALE = 0.1
ORIGIN_SCALE = 1.0


class Color(str, Enum):
    """Fixed marker palette."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    BLACK = "black"

    @classmethod
    def parse(cls, value: Union["Color", str]) -> "Color":
        """Resolve a palette entry from a Color or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(
            "Unknown marker color {value!r}, expected one of {palette}".format(
                value=value, palette=", ".join(c.value for c in cls)
            )
        )


DEFAULT_COLOR = Color.RED


class ZoomDirection(Enum):
    """Direction of a single zoom step."""

    IN = "in"
    OUT = "out"

    @classmethod
    def from_delta(cls, delta_y: float) -> "ZoomDirection":
        # Scrolling up (negative delta) zooms in
        return cls.IN if delta_y < 0 else cls.OUT


@dataclass(frozen=True)
class NormalizedPosition:
    """Fractional position over a reference box, not clamped to [0, 1]."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y}


ORIGIN_ANCHOR = NormalizedPosition(0.5, 0.5)


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


@dataclass
class ViewportState:
    """
    Zoom level and zoom anchor of the displayed image.

    The image is rendered scaled by ``scale`` about ``anchor``. Every zoom
    step replaces the anchor with the pointer position of that step, so
    the anchor follows the cursor tick by tick while the scale moves by a
    fixed step. The two updates are applied together, not solved jointly.
    """

    scale: float = ORIGIN_SCALE
    anchor: NormalizedPosition = ORIGIN_ANCHOR
    min_scale: float = MIN_SCALE
    max_scale: float = MAX_SCALE
    step_scale: float = STEP_SCALE

    def __post_init__(self):
        if self.min_scale > self.max_scale:
            raise ValueError(
                f"min_scale ({self.min_scale}) must not exceed max_scale ({self.max_scale})"
            )
        if self.step_scale <= 0:
            raise ValueError(f"step_scale must be positive, got {self.step_scale}")
        self.scale = clamp(self.scale, self.min_scale, self.max_scale)

    def reset(self):
        """Return to no magnification centered on the image."""
        self.scale = clamp(ORIGIN_SCALE, self.min_scale, self.max_scale)
        self.anchor = ORIGIN_ANCHOR

    def apply_zoom_step(
        self, direction: Union[ZoomDirection, str], new_anchor: NormalizedPosition
    ) -> float:
        """
        Apply one zoom step toward ``new_anchor``.

        Args:
            direction: Zoom in or out, a ZoomDirection or its value
            new_anchor: Pointer position of this step, replaces the anchor

        Returns:
            The new scale

        Raises:
            ValueError: If direction is neither in nor out
        """
        direction = ZoomDirection(direction)
        delta = self.step_scale if direction is ZoomDirection.IN else -self.step_scale
        self.scale = clamp(self.scale + delta, self.min_scale, self.max_scale)
        self.anchor = new_anchor
        return self.scale

    @property
    def is_zoomed(self) -> bool:
        return self.scale != ORIGIN_SCALE

    def snapshot(self) -> "ViewportState":
        """Copy that callers may hold without touching session state."""
        return ViewportState(
            scale=self.scale,
            anchor=self.anchor,
            min_scale=self.min_scale,
            max_scale=self.max_scale,
            step_scale=self.step_scale,
        )

    def to_dict(self):
        return {"scale": self.scale, "anchor": self.anchor.to_dict()}


@dataclass(frozen=True)
class Annotation:
    """A color-tagged marker at a normalized image position."""

    x: float
    y: float
    color: Color

    @property
    def position(self) -> NormalizedPosition:
        return NormalizedPosition(self.x, self.y)

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y, "color": self.color.value}


class AnnotationStore:
    """
    Ordered markers of the current image.

    Insertion order is also render order, so later markers are drawn on
    top of earlier ones.
    """

    def __init__(self):
        self._annotations: List[Annotation] = []

    def add(self, position: NormalizedPosition, color: Color) -> Annotation:
        """Append a marker. Positions outside [0, 1] are kept as is."""
        annotation = Annotation(x=position.x, y=position.y, color=color)
        self._annotations.append(annotation)
        return annotation

    def clear(self):
        self._annotations.clear()

    def list(self) -> Tuple[Annotation, ...]:
        return tuple(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(tuple(self._annotations))
