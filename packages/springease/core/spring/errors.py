from __future__ import annotations


class SpringResolutionError(ValueError):
    """Raised when spring input resolves to unusable physical constants.

    Attributes:
        stiffness: Resolved stiffness
        damping: Resolved damping
        mass: Resolved mass
    """

    def __init__(self, message: str, *, stiffness: float, damping: float, mass: float) -> None:
        super().__init__(message)
        self.stiffness = stiffness
        self.damping = damping
        self.mass = mass

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (stiffness={self.stiffness}, damping={self.damping}, mass={self.mass})"
