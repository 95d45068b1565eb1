"""Color vision deficiency simulation.

Dichromacy and anomalous trichromacy use the Machado, Oliveira and Fernandes
(2009) model shipped with colour-science; achromatopsia projects onto
Rec. 709 luminance. Matrices act on linear sRGB.
"""

from dataclasses import dataclass
from typing import Literal

import colour
import numpy as np

from .conversions import quantize_channel
from .models import RGB

__all__ = [
    "DeficiencyType",
    "DEFICIENCY_TYPES",
    "SimulationConfig",
    "get_color_matrix",
    "get_svg_matrix_values",
    "simulate_color",
]

DeficiencyType = Literal[
    "normal",
    "protanopia",
    "deuteranopia",
    "tritanopia",
    "protanomaly",
    "deuteranomaly",
    "tritanomaly",
    "achromatopsia",
]

DEFICIENCY_TYPES: tuple[str, ...] = (
    "normal",
    "protanopia",
    "deuteranopia",
    "tritanopia",
    "protanomaly",
    "deuteranomaly",
    "tritanomaly",
    "achromatopsia",
)

_MACHADO_DEFICIENCY = {
    "protanopia": "Protanomaly",
    "protanomaly": "Protanomaly",
    "deuteranopia": "Deuteranomaly",
    "deuteranomaly": "Deuteranomaly",
    "tritanopia": "Tritanomaly",
    "tritanomaly": "Tritanomaly",
}

_LUMA_709 = np.array([0.2126, 0.7152, 0.0722])


@dataclass(frozen=True)
class SimulationConfig:
    """Which deficiency to simulate and how strongly.

    ``severity`` only matters for the ``-anomaly`` types; the ``-opia`` types
    and achromatopsia always simulate the full deficiency.
    """

    type: DeficiencyType = "normal"
    severity: float = 1.0

    def __post_init__(self) -> None:
        if self.type not in DEFICIENCY_TYPES:
            raise ValueError(f"Unknown deficiency type: {self.type!r}")
        if not 0.0 <= self.severity <= 1.0:
            raise ValueError(f"severity must be in [0, 1], got {self.severity}")


def get_color_matrix(config: SimulationConfig) -> np.ndarray:
    """Return the 3x3 linear-sRGB matrix for ``config``."""
    if config.type == "normal":
        return np.identity(3)
    if config.type == "achromatopsia":
        return np.tile(_LUMA_709, (3, 1))

    severity = config.severity if config.type.endswith("anomaly") else 1.0
    return np.asarray(
        colour.blindness.matrix_cvd_Machado2009(
            _MACHADO_DEFICIENCY[config.type], severity
        )
    )


def get_svg_matrix_values(config: SimulationConfig) -> list[float]:
    """Flatten the matrix into the 20 values of an SVG ``feColorMatrix``."""
    matrix = get_color_matrix(config)
    values: list[float] = []
    for row in matrix:
        values.extend(float(v) for v in row)
        values.extend([0.0, 0.0])
    values.extend([0.0, 0.0, 0.0, 1.0, 0.0])
    return values


def simulate_color(rgb: RGB, config: SimulationConfig) -> RGB:
    """How ``rgb`` appears to a viewer with the configured deficiency."""
    if config.type == "normal":
        return rgb

    linear = get_color_matrix(config) @ colour.models.eotf_sRGB(np.array(rgb.normalized()))
    encoded = colour.models.eotf_inverse_sRGB(np.clip(linear, 0.0, 1.0))
    return RGB(*(quantize_channel(c * 255.0) for c in encoded))
