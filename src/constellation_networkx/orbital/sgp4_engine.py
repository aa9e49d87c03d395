"""
SGP4 Orbital Model

High-fidelity alternative to the circular Keplerian model: every satellite is
initialised with ``sgp4init`` (WGS72 gravity model) from its Walker elements
and propagated by the SGP4/SDP4 theory. Output is in the TEME frame, which is
treated as the inertial frame and rotated to Earth-fixed by GMST exactly like
the Keplerian path.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Tuple

import numpy as np
from sgp4.api import SGP4_ERRORS, WGS72, Satrec

from constellation_networkx.errors import InvalidStep
from constellation_networkx.orbital.elements import (
    SECONDS_PER_DAY,
    OrbitalElements,
    datetime_to_jd,
)

logger = logging.getLogger(__name__)

# Julian date of the SGP4 epoch origin (1949-12-31 00:00 UT)
SGP4_EPOCH_ORIGIN_JD = 2433281.5

# Near-circular orbits; SGP4 is singular at exactly zero eccentricity
SGP4_ECCENTRICITY = 0.0001


class Sgp4Orbit:
    """SGP4 propagator for one satellite, anchored at a reference epoch."""

    def __init__(self, elements: OrbitalElements, reference_epoch: datetime, satnum: int):
        jd, fr = datetime_to_jd(reference_epoch)
        epoch_days = (jd - SGP4_EPOCH_ORIGIN_JD) + fr

        # rad/min
        mean_motion = 2 * math.pi / (elements.period_seconds / 60.0)

        self.elements = elements
        self.satrec = Satrec()
        self.satrec.sgp4init(
            WGS72,
            "i",
            satnum,
            epoch_days,
            0.0,  # bstar: no drag
            0.0,  # ndot
            0.0,  # nddot
            SGP4_ECCENTRICITY,
            math.radians(elements.arg_periapsis_deg),
            math.radians(elements.inclination_deg),
            math.radians(elements.anomaly_deg),
            mean_motion,
            math.radians(elements.raan_deg),
        )

    def state_at(self, elapsed_seconds: float) -> Tuple[np.ndarray, np.ndarray]:
        """
        TEME position (km) and velocity (km/s) after elapsed_seconds.

        Raises:
            InvalidStep: If SGP4 cannot produce a state at that time
        """
        error, r_teme, v_teme = self.satrec.sgp4(
            self.satrec.jdsatepoch,
            self.satrec.jdsatepochF + elapsed_seconds / SECONDS_PER_DAY,
        )
        if error != 0:
            message = SGP4_ERRORS.get(error, f"error code {error}")
            logger.debug(
                "SGP4 failed for satnum %d at t=%.3fs: %s",
                self.satrec.satnum, elapsed_seconds, message,
            )
            raise InvalidStep(
                f"SGP4 propagation failed at t={elapsed_seconds:.3f}s: {message}"
            )
        return np.array(r_teme), np.array(v_teme)
