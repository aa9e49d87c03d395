"""Unit tests for constellation_networkx.network.constellation.

Tests validate:
- Construction at epoch 0 (counts, radii, frame)
- Ground station registry (ids, validation, fixed positions)
- Propagation (composability, rewinding, atomic failure)
"""

from __future__ import annotations

import math
from dataclasses import replace
from datetime import timedelta
from unittest.mock import MagicMock

import numpy as np
import pytest

from constellation_networkx.errors import InvalidCoordinate, InvalidStep, UnknownNode
from constellation_networkx.network.constellation import Constellation
from constellation_networkx.network.walker import (
    ConstellationType,
    PropagationModel,
    WalkerConfig,
)
from constellation_networkx.orbital.elements import EARTH_RADIUS_KM, inertial_to_ecef


def make_constellation(**overrides) -> Constellation:
    params = dict(
        satellites=12,
        planes=3,
        ipc=4,
        altitude_km=550.0,
        inclination_deg=53.0,
        min_elevation_deg=10.0,
        constellation_type=ConstellationType.DELTA,
    )
    params.update(overrides)
    return Constellation(WalkerConfig(**params))


def positions(c: Constellation) -> np.ndarray:
    return c.satellite_positions().copy()


class TestConstruction:
    """Tests for a freshly built constellation."""

    @pytest.mark.parametrize("satellites,planes", [(1, 1), (12, 3), (66, 6), (40, 40)])
    def test_satellite_count(self, satellites: int, planes: int) -> None:
        c = make_constellation(satellites=satellites, planes=planes, ipc=satellites // planes, phasing_factor=0)
        assert c.number_of_satellites == satellites
        assert len(c.ground_stations) == 0
        assert c.node_count == satellites
        assert c.epoch == 0

    def test_satellites_on_shell(self) -> None:
        """Earth rotation does not change the orbit radius."""
        c = make_constellation()
        radii = np.linalg.norm(c.satellite_positions(), axis=1)
        np.testing.assert_allclose(radii, EARTH_RADIUS_KM + 550.0)

    def test_ecef_is_rotated_inertial(self) -> None:
        c = make_constellation()
        theta = c.earth_rotation_rad
        for sat in c.satellites:
            np.testing.assert_allclose(sat.position, inertial_to_ecef(sat.position_inertial, theta))

    def test_without_earth_rotation_frames_coincide(self) -> None:
        c = make_constellation(earth_rotation=False)
        assert c.earth_rotation_rad == 0.0
        for sat in c.satellites:
            np.testing.assert_allclose(sat.position, sat.position_inertial)

    def test_altitude_recovered_from_position(self) -> None:
        c = make_constellation()
        for sat in c.satellites:
            assert sat.alt_km == pytest.approx(550.0)
            assert abs(sat.lat_deg) <= 53.0 + 1e-9

    def test_parameters_retained(self) -> None:
        c = make_constellation()
        assert c.config.satellites == 12
        assert c.constellation_type is ConstellationType.DELTA
        assert c.min_elevation_deg == 10.0

    def test_satellite_at_wraps(self) -> None:
        c = make_constellation()
        assert c.satellite_at(0, 4).id == 0
        assert c.satellite_at(3, 1).id == 1
        assert c.satellite_at(2, 3).id == 11

    def test_summary_and_repr(self) -> None:
        c = make_constellation()
        assert "Total satellites: 12" in c.summary()
        assert "satellites=12" in repr(c)


class TestGroundStations:
    """Tests for Constellation.add_groundstation."""

    def test_ids_follow_satellites(self) -> None:
        c = make_constellation()
        first = c.add_groundstation(0.0, 0.0, 0.0)
        second = c.add_groundstation(10.0, 20.0, 0.1, name="Saarbruecken")
        assert first.id == 12
        assert second.id == 13
        assert first.name == "GS-12"
        assert second.name == "Saarbruecken"
        assert c.node_count == 14
        assert [gs.id for gs in c.ground_stations] == [12, 13]

    def test_equator_prime_meridian_position(self) -> None:
        c = make_constellation()
        gs = c.add_groundstation(0.0, 0.0, 0.0)
        np.testing.assert_allclose(gs.position, [EARTH_RADIUS_KM, 0.0, 0.0], atol=1e-9)

    def test_duplicates_are_kept(self) -> None:
        c = make_constellation()
        c.add_groundstation(1.0, 2.0, 0.0)
        c.add_groundstation(1.0, 2.0, 0.0)
        assert len(c.ground_stations) == 2

    @pytest.mark.parametrize(
        "lat,lon",
        [(90.1, 0.0), (-91.0, 0.0), (0.0, 180.5), (0.0, -181.0), (float("nan"), 0.0)],
    )
    def test_invalid_coordinates(self, lat: float, lon: float) -> None:
        c = make_constellation()
        with pytest.raises(InvalidCoordinate):
            c.add_groundstation(lat, lon, 0.0)
        assert len(c.ground_stations) == 0

    def test_boundary_coordinates_accepted(self) -> None:
        c = make_constellation()
        c.add_groundstation(90.0, 180.0, 0.0)
        c.add_groundstation(-90.0, -180.0, 0.0)
        assert len(c.ground_stations) == 2

    def test_stations_do_not_move(self) -> None:
        c = make_constellation()
        gs = c.add_groundstation(48.0, 11.0, 0.5)
        before = gs.position.copy()
        c.propagate(5_000_000)
        np.testing.assert_array_equal(gs.position, before)


class TestNodeLookup:
    """Tests for get_node and distance."""

    def test_get_node(self) -> None:
        c = make_constellation()
        gs = c.add_groundstation(0.0, 0.0, 0.0)
        assert c.get_node(0) is c.satellites[0]
        assert c.get_node(12) is gs

    @pytest.mark.parametrize("node_id", [-1, 12, 100])
    def test_unknown_node(self, node_id: int) -> None:
        c = make_constellation()
        with pytest.raises(UnknownNode):
            c.get_node(node_id)

    def test_distance(self) -> None:
        c = make_constellation()
        assert c.distance(0, 0) == 0.0
        assert c.distance(0, 5) == pytest.approx(c.distance(5, 0))
        expected = np.linalg.norm(c.satellites[0].position - c.satellites[5].position)
        assert c.distance(0, 5) == pytest.approx(expected)

    def test_nodes_ordered_by_id(self) -> None:
        c = make_constellation()
        c.add_groundstation(0.0, 0.0, 0.0)
        assert [n.id for n in c.nodes()] == list(range(13))

    def test_links(self) -> None:
        c = make_constellation()
        links = c.links()
        assert len(links) == 24
        assert [link.key for link in links] == sorted(link.key for link in links)
        assert all(link.u < link.v for link in links)


class TestPropagation:
    """Tests for Constellation.propagate."""

    def test_returns_self_and_advances_epoch(self) -> None:
        c = make_constellation()
        assert c.propagate(1500) is c
        assert c.epoch == 1500
        assert c.elapsed_seconds == pytest.approx(1.5)
        assert c.current_time == c.config.reference_epoch + timedelta(seconds=1.5)

    def test_composable(self) -> None:
        """propagate(a); propagate(b) == propagate(a + b)."""
        split = make_constellation()
        split.propagate(1_234_567)
        split.propagate(2_345_678)

        joined = make_constellation()
        joined.propagate(1_234_567 + 2_345_678)

        assert split.epoch == joined.epoch
        np.testing.assert_allclose(positions(split), positions(joined), atol=1e-9)

    def test_rewind_restores_initial_state(self) -> None:
        c = make_constellation()
        start = positions(c)
        c.propagate(600_000)
        assert not np.allclose(positions(c), start)
        c.propagate(-600_000)
        assert c.epoch == 0
        np.testing.assert_allclose(positions(c), start, atol=1e-9)

    def test_negative_epoch(self) -> None:
        c = make_constellation()
        c.propagate(-10)
        assert c.epoch == -10

    def test_full_period_without_earth_rotation(self) -> None:
        """Four quarter-period steps bring every satellite back."""
        reference = make_constellation()
        quarter = reference.config.orbital_period_seconds / 4
        c = make_constellation(earth_rotation=False, step_seconds=quarter)
        start = positions(c)
        c.propagate(4)
        np.testing.assert_allclose(positions(c), start, atol=1e-6)

    def test_anomaly_tracks_time(self) -> None:
        reference = make_constellation()
        quarter = reference.config.orbital_period_seconds / 4
        c = make_constellation(step_seconds=quarter)
        c.propagate(1)
        for sat in c.satellites:
            expected = math.radians(sat.elements.anomaly_deg + 90.0)
            actual = math.radians(sat.anomaly_deg)
            assert math.cos(actual) == pytest.approx(math.cos(expected), abs=1e-9)
            assert math.sin(actual) == pytest.approx(math.sin(expected), abs=1e-9)

    @pytest.mark.parametrize("step", [1.5, "10", None, True])
    def test_non_integer_step_rejected(self, step) -> None:
        c = make_constellation()
        with pytest.raises(InvalidStep):
            c.propagate(step)
        assert c.epoch == 0

    def test_numpy_integer_step(self) -> None:
        c = make_constellation()
        c.propagate(np.int64(42))
        assert c.epoch == 42


class TestSgp4Propagation:
    """Tests for the SGP4 propagation model."""

    def test_sgp4_constellation(self) -> None:
        c = make_constellation(propagation_model=PropagationModel.SGP4)
        radii = np.linalg.norm(c.satellite_positions(), axis=1)
        np.testing.assert_allclose(radii, EARTH_RADIUS_KM + 550.0, atol=50.0)

    def test_sgp4_composable(self) -> None:
        split = make_constellation(propagation_model=PropagationModel.SGP4)
        split.propagate(300_000)
        split.propagate(450_000)
        joined = make_constellation(propagation_model=PropagationModel.SGP4)
        joined.propagate(750_000)
        np.testing.assert_allclose(positions(split), positions(joined), atol=1e-9)

    def test_sgp4_anomaly_matches_position(self) -> None:
        """The reported anomaly places the satellite where SGP4 put it."""
        c = make_constellation(propagation_model=PropagationModel.SGP4)
        c.propagate(1_234_567)
        for sat in c.satellites:
            nominal = replace(sat.elements, anomaly_deg=sat.anomaly_deg)
            rebuilt, _ = nominal.state_at(0.0)
            cos_angle = np.dot(rebuilt, sat.position_inertial) / (
                np.linalg.norm(rebuilt) * np.linalg.norm(sat.position_inertial)
            )
            assert math.degrees(math.acos(min(1.0, cos_angle))) < 1.0

    def test_failure_leaves_state_untouched(self) -> None:
        c = make_constellation(propagation_model=PropagationModel.SGP4)
        before = positions(c)

        fake = MagicMock()
        fake.satnum = 6
        fake.jdsatepoch = 2451544.5
        fake.jdsatepochF = 0.5
        fake.sgp4.return_value = (1, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
        c.satellites[5]._sgp4_orbit.satrec = fake

        with pytest.raises(InvalidStep):
            c.propagate(60_000)

        assert c.epoch == 0
        np.testing.assert_array_equal(positions(c), before)
