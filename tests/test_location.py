from servico_facil.location import (
    DEFAULT_LOCATION,
    Location,
    StaticLocationProvider,
    resolve_location,
)


class DeniedProvider:
    def get_current_location(self):
        raise PermissionError("Permission to access location was denied")


def test_default_location_is_rio_centre():
    assert DEFAULT_LOCATION == Location(-22.9068, -43.1729)


def test_static_provider_returns_coordinates():
    assert resolve_location(StaticLocationProvider(-22.91, -43.18)) == Location(-22.91, -43.18)


def test_missing_coordinates_fall_back():
    assert resolve_location(StaticLocationProvider(None, -43.18)) == DEFAULT_LOCATION


def test_failure_falls_back_to_given_point():
    sp = Location(-23.5505, -46.6333)
    assert resolve_location(DeniedProvider(), fallback=sp) == sp
