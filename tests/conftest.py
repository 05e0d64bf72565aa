# Pytest fixtures for the buoy finder test suite.
# Provides NDBC payloads and fake upstream clients so no test touches the network.

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient

from features.buoys.services.buoy_finder_service import BuoyFinderService

FAKE_PLOT = "iVBORw0KGgo="

STATIONS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<stations created="2026-10-17T12:00:00UTC" count="5">
  <station id="44097" lat="40.967" lon="-71.126" elev="0" name="Block Island, RI" owner="Scripps Institution of Oceanography" pgm="IOOS Partners" type="buoy" met="y" currents="n" waterquality="n" dart="n"/>
  <station id="44017" lat="40.693" lon="-72.049" elev="0" name="Montauk Point, NY" owner="NDBC" pgm="NDBC Meteorological/Ocean" type="buoy" met="y" currents="n" waterquality="n" dart="n"/>
  <station id="BUZM3" lat="41.397" lon="-71.033" elev="24.8" name="Buzzards Bay, MA" owner="NDBC" pgm="NDBC Meteorological/Ocean" type="fixed" met="y" currents="n" waterquality="n" dart="n"/>
  <station id="44066" lat="39.618" lon="-72.644" name="Texas Tower #4" owner="NDBC" pgm="NDBC Meteorological/Ocean" type="buoy" met="n" currents="n" waterquality="n" dart="n"/>
  <station lat="10.0" lon="10.0" name="Missing id"/>
</stations>
"""

LATEST_WAVE_OBS = """Station 44097
40.967 N 71.126 W

6:26 am EDT
1026 GMT 10/17/26

Seas: 4.6 ft
Peak Period: 8 sec
Water Temp: 50.0 °F
Mean Wave Dir: SE (135°)

Wave Summary

6:00 am EDT
1000 GMT 10/17/26

Swell: 3.6 ft
Period: 8.3 sec
Direction: SE
Wind Wave: 2.6 ft
Period: 4.3 sec
Direction: SW
"""

LATEST_MET_OBS = """Station 44017
40.693 N 72.049 W

7:50 am EDT
1150 GMT 10/17/26

Wind: SW (220°), 10.0 kt
Gust: 14.0 kt
Seas: 3.0 ft
Peak Period: 7 sec
Pres: 30.02 falling
P Tend: -0.04 in
Air Temp: 59.0 °F
Water Temp: 62.6 °F
Dew Point: 50.0 °F
"""

ENERGY_VALUES = [
    [0.1, 1.0, 4.0, 1.0, 0.2, 0.8, 0.1],
    [0.1, 0.5, 2.0, 0.5, 0.1, 0.4, 0.05],
]
ALPHA_VALUES = [
    [999.0, 120.0, 135.0, 140.0, 180.0, 225.0, 230.0],
    [999.0, 118.0, 130.0, 138.0, 170.0, 220.0, 228.0],
]
FREQUENCIES = [0.05, 0.075, 0.1, 0.125, 0.15, 0.2, 0.25]

def _stamp(date: datetime) -> str:
    return date.strftime("%Y %m %d %H %M")

def reference_time() -> datetime:
    """Newest whole minute; all history payloads are built relative to it."""
    return datetime.now(timezone.utc).replace(second=0, microsecond=0)

def standard_data_text(base: datetime) -> str:
    rows = [
        (base - timedelta(minutes=10), "220  5.0  7.0   1.2     8   5.4 150 1015.1  15.0  17.0  10.0   MM -0.4    MM"),
        (base - timedelta(minutes=20), "210  4.0  6.0    MM    MM    MM  MM 1015.3  15.1  17.0  10.1   MM   MM    MM"),
        (base - timedelta(minutes=70), "200  3.0  5.0   1.0     9   5.0 140 1015.8  14.8  17.1   9.8   MM   MM    MM"),
    ]
    lines = [
        "#YY  MM DD hh mm WDIR WSPD GST  WVHT   DPD   APD MWD   PRES  ATMP  WTMP  DEWP  VIS PTDY  TIDE",
        "#yr  mo dy hr mn degT m/s  m/s     m   sec   sec degT   hPa  degC  degC  degC  nmi  hPa    ft",
    ]
    lines.extend(f"{_stamp(date)} {values}" for date, values in rows)
    return "\n".join(lines) + "\n"

def spectra_dates(base: datetime):
    return [base - timedelta(minutes=20), base - timedelta(minutes=80)]

def energy_spectra_text(base: datetime) -> str:
    lines = ["#YY  MM DD hh mm Sep_Freq  < spec_1 (freq_1) spec_2 (freq_2) spec_3 (freq_3) ... >"]
    for date, energies in zip(spectra_dates(base), ENERGY_VALUES):
        pairs = " ".join(f"{e:.3f} ({f:.3f})" for e, f in zip(energies, FREQUENCIES))
        lines.append(f"{_stamp(date)} 0.200 {pairs}")
    return "\n".join(lines) + "\n"

def directional_spectra_text(base: datetime) -> str:
    lines = ["#YY  MM DD hh mm alpha1_1 (freq_1) alpha1_2 (freq_2) alpha1_3 (freq_3) ... >"]
    for date, angles in zip(spectra_dates(base), ALPHA_VALUES):
        pairs = " ".join(f"{a:.1f} ({f:.3f})" for a, f in zip(angles, FREQUENCIES))
        lines.append(f"{_stamp(date)} {pairs}")
    return "\n".join(lines) + "\n"

class FakeNDBCClient:
    """Serves canned NDBC payloads and records which files were requested."""

    def __init__(self, payloads, errors=None):
        self.payloads = payloads
        self.errors = errors or {}
        self.calls = []
        self.closed = False

    async def _get(self, kind, station_id=None):
        self.calls.append((kind, station_id))
        if kind in self.errors:
            raise self.errors[kind]
        return self.payloads[kind]

    async def fetch_station_directory(self):
        return await self._get("stations")

    async def fetch_latest_reading(self, station_id):
        return await self._get("latest", station_id)

    async def fetch_standard_data(self, station_id):
        return await self._get("std", station_id)

    async def fetch_directional_spectra(self, station_id):
        return await self._get("swdir", station_id)

    async def fetch_energy_spectra(self, station_id):
        return await self._get("data_spec", station_id)

    async def close(self):
        self.closed = True

class FakeChartClient:
    def __init__(self):
        self.rendered = []

    async def directional_spectra_chart(self, station_id, item):
        self.rendered.append(("directional", station_id))
        return FAKE_PLOT

    async def spectra_distribution_chart(self, station_id, item):
        self.rendered.append(("distribution", station_id))
        return FAKE_PLOT

    async def close(self):
        pass

@pytest.fixture
def base_time():
    return reference_time()

@pytest.fixture
def ndbc_payloads(base_time):
    return {
        "stations": STATIONS_XML,
        "latest": LATEST_MET_OBS,
        "std": standard_data_text(base_time),
        "swdir": directional_spectra_text(base_time),
        "data_spec": energy_spectra_text(base_time),
    }

@pytest.fixture
def fake_ndbc_client(ndbc_payloads):
    return FakeNDBCClient(ndbc_payloads)

@pytest.fixture
def fake_chart_client():
    return FakeChartClient()

@pytest.fixture
def service(fake_ndbc_client, fake_chart_client):
    return BuoyFinderService(ndbc_client=fake_ndbc_client, chart_client=fake_chart_client)

@pytest.fixture
def api_client(service):
    """TestClient whose app serves readings from the fake clients."""
    from main import app

    with TestClient(app) as client:
        app.state.buoy_finder_service = service
        yield client

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "api: mark test as exercising the HTTP routes")
