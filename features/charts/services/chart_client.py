import asyncio
import base64
import json
import logging
import aiohttp
from typing import Any, Dict, Optional

from core.config import settings
from features.buoys.models.buoy_types import BuoyDataItem
from features.charts.services.chart_options import (
    build_directional_spectra_options,
    build_spectra_distribution_options
)

logger = logging.getLogger(__name__)

class ChartClient:
    """Renders chart options to PNG through the Highcharts export server."""

    def __init__(
        self,
        export_url: str = settings.chart_export_url,
        timeout: float = settings.request_timeout
    ):
        self.export_url = export_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _init_session(self) -> aiohttp.ClientSession:
        if not self._session or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None

    async def render(self, options: Dict[str, Any]) -> str:
        """Base64 encoded PNG for the given options, or "" if rendering fails."""
        form = {
            "content": "options",
            "options": json.dumps(options),
            "scale": str(settings.chart_scale),
            "type": "image/png",
            "constr": "Chart"
        }
        try:
            session = await self._init_session()
            async with session.post(self.export_url, data=form) as response:
                response.raise_for_status()
                content_type = response.headers.get("Content-Type", "")
                if not content_type.startswith("image/"):
                    logger.warning(f"Chart export returned {content_type or 'no content type'} instead of an image")
                    return ""
                raw_chart = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Error rendering chart: {str(e)}")
            return ""

        return base64.b64encode(raw_chart).decode("ascii")

    async def directional_spectra_chart(self, station_id: str, item: BuoyDataItem) -> str:
        if item.wave_spectra is None or item.wave_spectra.is_empty:
            return ""
        return await self.render(build_directional_spectra_options(station_id, item))

    async def spectra_distribution_chart(self, station_id: str, item: BuoyDataItem) -> str:
        if item.wave_spectra is None or item.wave_spectra.is_empty:
            return ""
        return await self.render(build_spectra_distribution_options(station_id, item))
