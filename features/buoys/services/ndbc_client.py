import asyncio
import logging
import aiohttp
from typing import Optional

from core.config import settings
from features.common.exceptions.buoy_exceptions import (
    StationDataNotFoundError,
    UpstreamServiceError
)

logger = logging.getLogger(__name__)

class NDBCClient:
    """Downloads raw station directory and reading files from NDBC."""

    def __init__(self, timeout: float = settings.request_timeout):
        self._session: Optional[aiohttp.ClientSession] = None
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def _get_text(self, url: str) -> str:
        session = await self._init_session()
        try:
            async with session.get(url) as response:
                response.raise_for_status()
                # latest_obs files carry degree signs that may not match the declared charset
                return await response.text(errors="replace")
        except aiohttp.ClientResponseError as e:
            if e.status == 404:
                logger.warning(f"NDBC has no data at {url}")
                raise StationDataNotFoundError(f"No data available at {url}")
            logger.error(f"NDBC returned {e.status} for {url}: {e.message}")
            raise UpstreamServiceError(f"NDBC returned {e.status} for {url}")
        except asyncio.TimeoutError:
            logger.error(f"Timed out fetching {url}")
            raise UpstreamServiceError(f"Timed out fetching {url}")
        except aiohttp.ClientError as e:
            logger.error(f"Error fetching {url}: {str(e)}")
            raise UpstreamServiceError(f"Error fetching {url}: {str(e)}")

    async def fetch_station_directory(self) -> str:
        """Raw activestations.xml document."""
        return await self._get_text(settings.active_stations_url)

    async def fetch_latest_reading(self, station_id: str) -> str:
        return await self._get_text(settings.ndbc_url("latest", station_id))

    async def fetch_standard_data(self, station_id: str) -> str:
        return await self._get_text(settings.ndbc_url("std", station_id))

    async def fetch_directional_spectra(self, station_id: str) -> str:
        return await self._get_text(settings.ndbc_url("swdir", station_id))

    async def fetch_energy_spectra(self, station_id: str) -> str:
        return await self._get_text(settings.ndbc_url("data_spec", station_id))
