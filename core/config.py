from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, Optional

BASE_DIR = Path(__file__).resolve().parent.parent

class Settings(BaseSettings):
    """Application settings."""

    # NDBC settings
    ndbc_base_url: str = "https://www.ndbc.noaa.gov"
    ndbc_active_stations_path: str = "/activestations.xml"
    ndbc_data_paths: Dict[str, str] = {
        "latest": "/data/latest_obs/{station_id}.txt",    # Latest observation summary
        "std": "/data/realtime2/{station_id}.txt",        # Standard meteorological data
        "swdir": "/data/realtime2/{station_id}.swdir",    # Spectral wave direction (alpha1)
        "data_spec": "/data/realtime2/{station_id}.data_spec"  # Raw spectral wave data
    }

    # Records per hour published by NDBC for each history file
    records_per_hour: Dict[str, int] = {
        "std": 6,
        "spectra": 2
    }

    # Highcharts export server
    chart_export_url: str = "https://export.highcharts.com/"
    chart_scale: int = 3

    request_timeout: float = 20.0

    # Web pages
    templates_dir: str = "templates"
    static_dir: str = "static"
    google_maps_api_key: Optional[str] = None

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5010

    def resolve_dir(self, directory: str) -> Path:
        """Resolve a configured directory against the project root."""
        path = Path(directory)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def active_stations_url(self) -> str:
        return f"{self.ndbc_base_url}{self.ndbc_active_stations_path}"

    def ndbc_url(self, data_type: str, station_id: str) -> str:
        """Build the NDBC URL for a station data file."""
        return f"{self.ndbc_base_url}{self.ndbc_data_paths[data_type].format(station_id=station_id)}"

    model_config = SettingsConfigDict(
        env_prefix="buoyfinder_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
