"""
Command line entrypoint for the AMap reverse geocoding client.

Usage:
    AMAP_KEY=<key> python main.py <identifier> <lng> <lat>

Prints the resolved address as JSON.
"""
import sys
import json
import logging

from amap_regeo.geocoding.amap import AMapClient
from amap_regeo.geocoding.errors import GeocodeError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

logger = logging.getLogger("amap_regeo")


def main(argv=None):
    """
    Reverse geocode a single point.

    Args:
        argv: Arguments after the program name, defaults to sys.argv[1:]

    Returns:
        Process exit code
    """
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 3:
        print(__doc__.strip())
        return 1

    identifier, lng, lat = argv
    try:
        client = AMapClient.from_env(logger)
    except ValueError as e:
        print(f"Configuration error: {e}. Set the AMAP_KEY environment variable.")
        return 1

    try:
        address = client.reverse_geocode(identifier, lng, lat)
    except GeocodeError as e:
        print(f"Reverse geocoding failed: {e}")
        return 1

    print(json.dumps(address.model_dump(by_alias=True), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
