"""Motion sample model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MotionSample:
    """One instantaneous accelerometer reading reduced to a magnitude."""
    magnitude: float

    @classmethod
    def from_axes(cls, x: float, y: float, z: float) -> "MotionSample":
        """Build a sample from the three axis readings.

        The magnitude is the plain algebraic sum of the axes, not the
        Euclidean norm, and gravity is not removed.
        """
        return cls(magnitude=float(x) + float(y) + float(z))
