"""Wave summaries derived from NDBC energy spectra."""
from typing import List, Optional, Sequence, Tuple

import numpy as np

from features.buoys.models.buoy_types import Swell, Units, WaveSpectra

# Components smaller than this are noise in the spectrum tail
MIN_COMPONENT_HEIGHT = 0.05  # meters

def _bandwidths(frequencies: np.ndarray) -> np.ndarray:
    if frequencies.size == 1:
        return np.array([0.01])
    return np.abs(np.gradient(frequencies))

def significant_height(
    energies: Sequence[float],
    frequencies: Sequence[float],
    bandwidths: Optional[np.ndarray] = None
) -> float:
    """Hs = 4 * sqrt(m0), m0 being the zeroth spectral moment.

    Pass ``bandwidths`` when integrating a slice of a larger spectrum so the
    edge bands keep the widths they have in the full spectrum.
    """
    energy = np.asarray(energies, dtype=float)
    if energy.size == 0:
        return 0.0
    if bandwidths is None:
        bandwidths = _bandwidths(np.asarray(frequencies, dtype=float))
    m0 = float(np.sum(energy * bandwidths))
    return 4.0 * float(np.sqrt(max(m0, 0.0)))

def find_peaks(energies: Sequence[float]) -> List[int]:
    """Indices of local maxima in the energy spectrum."""
    energy = np.asarray(energies, dtype=float)
    peaks = []
    for i in range(energy.size):
        if energy[i] <= 0:
            continue
        left = energy[i - 1] if i > 0 else -np.inf
        right = energy[i + 1] if i < energy.size - 1 else -np.inf
        if energy[i] > left and energy[i] >= right:
            peaks.append(i)
    return peaks

def _partition_bounds(energy: np.ndarray, peaks: List[int]) -> List[Tuple[int, int]]:
    """Split the spectrum at the minimum between each pair of adjacent peaks."""
    bounds = []
    start = 0
    for left, right in zip(peaks, peaks[1:]):
        split = left + int(np.argmin(energy[left:right + 1]))
        bounds.append((start, split))
        start = split + 1
    bounds.append((start, energy.size - 1))
    return bounds

def _angle_at(angles: Sequence[Optional[float]], index: int) -> Optional[float]:
    if index < len(angles):
        return angles[index]
    return None

def wave_summary(spectra: WaveSpectra) -> Swell:
    """Significant height with the period and direction of the spectral peak."""
    if spectra.is_empty:
        return Swell(units=Units.METRIC)

    energy = np.asarray(spectra.energies, dtype=float)
    peak = int(np.argmax(energy))
    frequency = spectra.frequencies[peak]
    return Swell(
        wave_height=significant_height(spectra.energies, spectra.frequencies),
        period=1.0 / frequency if frequency > 0 else None,
        direction=_angle_at(spectra.angles, peak),
        units=Units.METRIC
    )

def swell_components(spectra: WaveSpectra) -> List[Swell]:
    """Individual swell trains, one per spectral peak, largest first."""
    if spectra.is_empty:
        return []

    energy = np.asarray(spectra.energies, dtype=float)
    freqs = np.asarray(spectra.frequencies, dtype=float)
    peaks = find_peaks(energy)
    if not peaks:
        return []
    bandwidths = _bandwidths(freqs)

    components = []
    for peak, (start, end) in zip(peaks, _partition_bounds(energy, peaks)):
        height = significant_height(
            energy[start:end + 1],
            freqs[start:end + 1],
            bandwidths[start:end + 1]
        )
        if height < MIN_COMPONENT_HEIGHT:
            continue
        components.append(Swell(
            wave_height=height,
            period=1.0 / freqs[peak] if freqs[peak] > 0 else None,
            direction=_angle_at(spectra.angles, peak),
            units=Units.METRIC
        ))

    components.sort(key=lambda s: s.wave_height or 0.0, reverse=True)
    return components

def steepness(height: Optional[float], period: Optional[float]) -> Optional[str]:
    """NDBC style steepness class from height (m) and period (s)."""
    if height is None or not period:
        return None
    ratio = height / (period * period)
    if ratio >= 0.025:
        return "VERY_STEEP"
    elif ratio >= 0.02:
        return "STEEP"
    return None
