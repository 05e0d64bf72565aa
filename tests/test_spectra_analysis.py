# Tests for wave summaries and swell components derived from energy spectra.

import pytest

from features.buoys.models.buoy_types import WaveSpectra
from features.buoys.services import spectra_analysis

from conftest import ALPHA_VALUES, ENERGY_VALUES, FREQUENCIES


@pytest.fixture
def spectra():
    angles = [None if a == 999.0 else a for a in ALPHA_VALUES[0]]
    return WaveSpectra(
        frequencies=FREQUENCIES,
        energies=ENERGY_VALUES[0],
        angles=angles,
        separation_frequency=0.2
    )


class TestSignificantHeight:

    @pytest.mark.unit
    def test_four_times_root_m0(self):
        # Uniform 0.1 Hz bands with 1 m^2/Hz each: m0 = 0.3
        height = spectra_analysis.significant_height([1.0, 1.0, 1.0], [0.1, 0.2, 0.3])
        assert height == pytest.approx(4 * 0.3 ** 0.5)

    @pytest.mark.unit
    def test_empty_spectrum(self):
        assert spectra_analysis.significant_height([], []) == 0.0


class TestPeaks:

    @pytest.mark.unit
    def test_local_maxima(self):
        assert spectra_analysis.find_peaks([0.1, 1.0, 4.0, 1.0, 0.2, 0.8, 0.1]) == [2, 5]

    @pytest.mark.unit
    def test_plateau_counts_once(self):
        assert spectra_analysis.find_peaks([0.0, 2.0, 2.0, 0.0]) == [1]

    @pytest.mark.unit
    def test_zero_energy_has_no_peaks(self):
        assert spectra_analysis.find_peaks([0.0, 0.0, 0.0]) == []


class TestWaveSummary:

    @pytest.mark.unit
    def test_summary(self, spectra):
        summary = spectra_analysis.wave_summary(spectra)

        assert summary.wave_height == pytest.approx(1.81108, rel=1e-4)
        assert summary.period == pytest.approx(10.0)
        assert summary.direction == pytest.approx(135.0)
        assert summary.compass_direction == "SE"

    @pytest.mark.unit
    def test_empty_spectrum(self):
        summary = spectra_analysis.wave_summary(WaveSpectra())
        assert summary.wave_height is None
        assert summary.period is None


class TestSwellComponents:

    @pytest.mark.unit
    def test_components_split_at_trough(self, spectra):
        primary, secondary = spectra_analysis.swell_components(spectra)

        assert primary.wave_height == pytest.approx(1.6, rel=1e-4)
        assert primary.period == pytest.approx(10.0)
        assert primary.direction == pytest.approx(135.0)
        assert secondary.wave_height == pytest.approx(0.84853, rel=1e-4)
        assert secondary.period == pytest.approx(5.0)
        assert secondary.compass_direction == "SW"

    @pytest.mark.unit
    def test_components_add_up_to_total(self, spectra):
        # Hs^2 is proportional to m0, so partition energies must sum to the whole
        total = spectra_analysis.wave_summary(spectra).wave_height
        components = spectra_analysis.swell_components(spectra)
        assert sum(c.wave_height ** 2 for c in components) == pytest.approx(total ** 2)

    @pytest.mark.unit
    def test_largest_first(self):
        spectra = WaveSpectra(
            frequencies=[0.05, 0.1, 0.15, 0.2, 0.25],
            energies=[0.5, 0.1, 0.2, 3.0, 0.2],
            angles=[90.0, 100.0, 110.0, 200.0, 210.0]
        )
        components = spectra_analysis.swell_components(spectra)
        assert [c.direction for c in components] == [200.0, 90.0]

    @pytest.mark.unit
    def test_tiny_components_are_dropped(self):
        spectra = WaveSpectra(
            frequencies=[0.1, 0.2, 0.3],
            energies=[0.0, 0.0001, 0.0],
            angles=[10.0, 20.0, 30.0]
        )
        assert spectra_analysis.swell_components(spectra) == []


class TestSteepness:

    @pytest.mark.unit
    @pytest.mark.parametrize("height, period, expected", [
        (2.5, 10.0, "VERY_STEEP"),
        (2.0, 10.0, "STEEP"),
        (1.0, 10.0, None),
        (None, 10.0, None),
        (1.0, None, None),
    ])
    def test_classes(self, height, period, expected):
        assert spectra_analysis.steepness(height, period) == expected
