class BuoyFinderError(Exception):
    """Base exception for buoy lookup errors."""
    pass

class StationNotFoundError(BuoyFinderError):
    """Raised when a station id or location cannot be matched to a station."""
    pass

class StationDataNotFoundError(BuoyFinderError):
    """Raised when NDBC has no file of the requested type for a station."""
    pass

class UpstreamServiceError(BuoyFinderError):
    """Raised when NDBC cannot be reached or answers with an error."""
    pass

class BuoyDataError(BuoyFinderError):
    """Raised when NDBC data cannot be parsed or holds no readings."""
    pass
