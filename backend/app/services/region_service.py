"""
Reverse geocoding and region majority vote.
"""
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple
import httpx
import logging
from app.core.config import settings
from app.models.photo import Photo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionInfo:
    """Two-level region label returned by the resolver."""
    region1: Optional[str]  # Province / metropolitan city
    region2: Optional[str]  # District

    @property
    def full_label(self) -> Optional[str]:
        """Return "region1 region2", or whichever level is present."""
        parts = [part for part in (self.region1, self.region2) if part]
        return " ".join(parts) if parts else None


class KakaoRegionResolver:
    """Region resolver backed by the Kakao coord2regioncode API."""

    def __init__(
        self,
        api_key: str = None,
        api_url: str = None,
        timeout: float = None,
        client: Optional[httpx.Client] = None
    ):
        self.api_key = api_key if api_key is not None else settings.KAKAO_API_KEY
        self.api_url = api_url or settings.KAKAO_API_URL
        self.timeout = timeout or settings.GEOCODING_TIMEOUT
        self._client = client

    def lookup(self, latitude: float, longitude: float) -> Optional[RegionInfo]:
        """
        Resolve coordinates to a region label.

        Any failure (missing key, HTTP error, timeout, empty result) is logged
        and reported as None; geocoding never raises to the caller.
        """
        if latitude is None or longitude is None:
            return None

        if not self.api_key:
            logger.warning("KAKAO_API_KEY is not configured. Skipping reverse geocoding.")
            return None

        headers = {"Authorization": f"KakaoAK {self.api_key}"}
        params = {"x": str(longitude), "y": str(latitude)}

        try:
            if self._client is not None:
                response = self._client.get(self.api_url, params=params, headers=headers, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(self.api_url, params=params, headers=headers)
            response.raise_for_status()
            documents = response.json().get("documents") or []
        except httpx.TimeoutException:
            logger.error(f"Reverse geocoding timed out: ({latitude}, {longitude})")
            return None
        except httpx.HTTPStatusError as e:
            logger.error(f"Reverse geocoding HTTP error {e.response.status_code}: ({latitude}, {longitude})")
            return None
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Reverse geocoding failed: ({latitude}, {longitude}) - {e}")
            return None

        if not documents:
            logger.info(f"No region found for ({latitude}, {longitude})")
            return None

        first = documents[0]
        info = RegionInfo(
            region1=first.get("region_1depth_name") or None,
            region2=first.get("region_2depth_name") or None,
        )
        logger.debug(f"Reverse geocoded ({latitude}, {longitude}) -> {info.full_label}")
        return info


class CachedRegionResolver:
    """Wraps a resolver and remembers each (latitude, longitude) answer, misses included."""

    def __init__(self, resolver):
        self.resolver = resolver
        self._cache: Dict[Tuple[float, float], Optional[RegionInfo]] = {}

    def lookup(self, latitude: float, longitude: float) -> Optional[RegionInfo]:
        key = (latitude, longitude)
        if key not in self._cache:
            self._cache[key] = self.resolver.lookup(latitude, longitude)
        return self._cache[key]


def district_label(resolver, photo: Photo) -> Optional[str]:
    """District-level label for a photo, or None when it cannot be resolved."""
    if not photo.has_location:
        return None
    info = resolver.lookup(photo.latitude, photo.longitude)
    if info is None:
        return None
    return info.region2


def majority_region(photos: Iterable[Photo], resolver) -> Optional[str]:
    """
    Most frequent district label among the photos that carry coordinates.

    Ties go to the label seen first. Returns None when no photo produced a label.
    """
    counts = Counter()
    for photo in photos:
        label = district_label(resolver, photo)
        if label:
            counts[label] += 1

    if not counts:
        return None

    # max() keeps the first maximal item and Counter keeps insertion order
    return max(counts.items(), key=lambda item: item[1])[0]
