"""
Tests for reverse geocoding and region majority vote.
"""
import httpx
from datetime import datetime
from app.models.photo import Photo
from app.services.region_service import CachedRegionResolver, KakaoRegionResolver, RegionInfo, majority_region


class LabelResolver:
    """Resolver returning a district label per latitude."""

    def __init__(self, labels):
        self.labels = labels

    def lookup(self, latitude, longitude):
        label = self.labels.get(latitude)
        return RegionInfo("Province", label) if label else None


def photos_at(*latitudes):
    return [
        Photo(taken_at=datetime(2025, 1, 15), latitude=lat, longitude=127.0 if lat is not None else None)
        for lat in latitudes
    ]


def test_majority_region_picks_most_frequent_label():
    resolver = LabelResolver({1.0: "A", 2.0: "B", 3.0: "C"})
    assert majority_region(photos_at(1.0, 2.0, 1.0, 3.0), resolver) == "A"


def test_majority_region_tie_goes_to_first_seen():
    resolver = LabelResolver({1.0: "A", 2.0: "B"})
    assert majority_region(photos_at(1.0, 2.0), resolver) == "A"
    assert majority_region(photos_at(2.0, 1.0), resolver) == "B"


def test_majority_region_without_coordinates_is_none():
    resolver = LabelResolver({1.0: "A"})
    assert majority_region(photos_at(None, None), resolver) is None


def test_majority_region_skips_unresolvable_photos():
    resolver = LabelResolver({2.0: "B"})
    assert majority_region(photos_at(9.0, 9.0, 2.0), resolver) == "B"


def test_region_info_full_label():
    assert RegionInfo("Busan", "Haeundae-gu").full_label == "Busan Haeundae-gu"
    assert RegionInfo(None, "Haeundae-gu").full_label == "Haeundae-gu"
    assert RegionInfo(None, None).full_label is None


def test_kakao_resolver_parses_first_document():
    def handler(request):
        assert request.headers["Authorization"] == "KakaoAK test-key"
        assert request.url.params["x"] == "129.1635"
        assert request.url.params["y"] == "35.1631"
        return httpx.Response(200, json={"documents": [
            {"region_1depth_name": "Busan", "region_2depth_name": "Haeundae-gu"},
            {"region_1depth_name": "Other", "region_2depth_name": "Other-gu"},
        ]})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    resolver = KakaoRegionResolver(api_key="test-key", api_url="https://geo.test/lookup", client=client)

    assert resolver.lookup(35.1631, 129.1635) == RegionInfo("Busan", "Haeundae-gu")


def test_kakao_resolver_returns_none_on_http_error():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    resolver = KakaoRegionResolver(api_key="test-key", api_url="https://geo.test/lookup", client=client)

    assert resolver.lookup(35.1631, 129.1635) is None


def test_kakao_resolver_returns_none_on_empty_documents():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"documents": []})))
    resolver = KakaoRegionResolver(api_key="test-key", api_url="https://geo.test/lookup", client=client)

    assert resolver.lookup(35.1631, 129.1635) is None


def test_kakao_resolver_without_key_does_not_call_api():
    def handler(request):
        raise AssertionError("API must not be called without a key")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    resolver = KakaoRegionResolver(api_key="", api_url="https://geo.test/lookup", client=client)

    assert resolver.lookup(35.1631, 129.1635) is None


def test_cached_resolver_remembers_hits_and_misses():
    class CountingResolver:
        def __init__(self):
            self.calls = 0

        def lookup(self, latitude, longitude):
            self.calls += 1
            return RegionInfo("Province", "A") if latitude == 1.0 else None

    inner = CountingResolver()
    resolver = CachedRegionResolver(inner)

    assert majority_region(photos_at(1.0, 1.0, 9.0, 9.0, 1.0), resolver) == "A"
    assert inner.calls == 2
