"""
AMap reverse geocoding client.

Converts a longitude/latitude pair into province, city and district names
together with their administrative division codes.
"""
import requests
import pydantic
import logging
import concurrent.futures

from amap_regeo import config
from amap_regeo.geocoding.errors import GeocodeError, TransportError, DecodeError, ProviderError, ValidationError
from amap_regeo.geocoding.rate_limiter import TokenBucket
from amap_regeo.models.address import AddressInfo, GeocodeResponse

# Get logger
logger = logging.getLogger(__name__)

STATUS_OK = "1"
ADCODE_LENGTH = 6


class AMapClient:
    """
    Client for the AMap /v3/geocode/regeo endpoint.

    Every call first waits on the client's rate limiter, so one client never sends
    more than one request per refill interval no matter how many threads share it.

    Args:
        key: AMap web service key
        logger: Logger receiving one record per reverse_geocode call
        limiter: Rate limiter, defaults to one token per second with a capacity of one
        session: requests.Session used for outbound calls
        url: Regeo endpoint
        timeout: Seconds before an outbound request is abandoned
    """

    def __init__(self, key, logger, limiter=None, session=None, url=None, timeout=None):
        if not key:
            raise ValueError("amap key must be set")
        if logger is None:
            raise ValueError("amap logger must be set")
        self.key = key
        self.logger = logger
        self.limiter = limiter or TokenBucket(rate=config.RATE_LIMIT, burst=1)
        self.session = session or requests.Session()
        self.url = url or config.AMAP_REGEO_URL
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    @classmethod
    def from_env(cls, logger=None):
        """Build a client from the AMAP_* environment settings."""
        return cls(config.AMAP_KEY, logger or logging.getLogger("amap_regeo"))

    def reverse_geocode(self, identifier, lng, lat, cancel=None):
        """
        Look up the address at the given coordinates.

        Args:
            identifier: Caller supplied id, only used to correlate the log record
            lng: Longitude as a string
            lat: Latitude as a string
            cancel: Optional threading.Event that aborts the rate limiter wait

        Returns:
            AddressInfo for the location

        Raises:
            GeocodeError: One of its subclasses, nothing is returned on failure
        """
        error = None
        try:
            self.limiter.wait(cancel=cancel)
            response = self._fetch(lng, lat)
            return self._to_address(response)
        except BaseException as e:
            error = e
            raise
        finally:
            level = logging.INFO if error is None else logging.WARNING
            self.logger.log(
                level,
                f"{identifier} lng={lng} lat={lat} error={error}",
                extra={"identifier": identifier, "lng": lng, "lat": lat, "error": error}
            )

    def _fetch(self, lng, lat):
        params = {
            "output": "JSON",
            "extensions": "base",
            "key": self.key,
            "location": f"{lng},{lat}"
        }

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"regeo request failed: {e}") from e

        try:
            return GeocodeResponse.model_validate_json(response.content)
        except pydantic.ValidationError as e:
            raise DecodeError(f"unexpected regeo response: {e}") from e

    def _to_address(self, response):
        if response.status != STATUS_OK:
            raise ProviderError(response.info, response.infocode)

        component = response.regeocode.address_component
        district_code = component.adcode
        if len(district_code) != ADCODE_LENGTH:
            raise ValidationError("address code invalid")

        province = component.province
        city = component.city or province
        district = component.district or component.township
        if not province or not city or not district:
            raise ValidationError("administrative region invalid")

        return AddressInfo(
            province=province,
            province_code=district_code[0:2],
            city=city,
            city_code=district_code[0:4],
            district=district,
            district_code=district_code,
            address=response.regeocode.formatted_address
        )


def batch_reverse_geocode(client, points, max_workers=4):
    """
    Reverse geocodes many points in parallel through one client.

    The client's rate limiter still spaces the outbound requests, the thread pool
    only overlaps the waiting and the response handling. Repeated points are
    looked up once.

    Args:
        client: AMapClient shared by every worker
        points: Iterable of (identifier, lng, lat) tuples
        max_workers: Maximum number of worker threads

    Returns:
        Dict mapping each (identifier, lng, lat) tuple to its AddressInfo or to the exception it failed with
    """
    # Format: {(identifier, lng, lat): AddressInfo or exception}
    unique_points = list(dict.fromkeys(tuple(point) for point in points))
    results = {}
    success_count = 0
    failure_count = 0

    total_points = len(unique_points)
    logger.info(f"Starting batch reverse geocoding for {total_points} points with {max_workers} workers")

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_point = {
            executor.submit(client.reverse_geocode, *point): point
            for point in unique_points
        }

        for i, future in enumerate(concurrent.futures.as_completed(future_to_point)):
            point = future_to_point[future]
            try:
                results[point] = future.result()
                success_count += 1
            except GeocodeError as e:
                results[point] = e
                failure_count += 1
            except Exception as e:
                logger.error(f"Unexpected error reverse geocoding {point}: {str(e)}")
                results[point] = e
                failure_count += 1

            # Log progress every 10 points or at the end
            if (i + 1) % 10 == 0 or (i + 1) == total_points:
                logger.info(f"Reverse geocoding progress: {i+1}/{total_points} ({((i+1)/total_points*100):.1f}%)")

    total = success_count + failure_count
    if total > 0:
        success_rate = (success_count / total) * 100
        logger.info(f"Batch reverse geocoding completed: {success_rate:.1f}% success rate ({success_count}/{total}, {failure_count} failed)")

    return results
