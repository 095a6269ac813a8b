"""
Reference Element Sets

Well-known TLEs with published reference states, used by the test suite
and as examples for callers.

Reference states:
    VANGUARD_2: Vallado et al. (2006) verification output (tcppver.out),
    TEME km and km/s at the listed minutes from epoch.

    ISS_2019: python-sgp4 documentation example, TEME km and km/s at
    JD 2458826.5 + 0.8625.

    HIGH_ORBIT_SAMPLE: an ephemeris type 'H' record, state vector in
    meters and m/s (equatorial); no published propagation.

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

from typing import Any, Dict

VANGUARD_2: Dict[str, Any] = {
    "name": "VANGUARD 2",
    "norad_id": 5,
    "line1": "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753",
    "line2": "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667",
    "epoch_jd": 2451723.28495062,
    "reference_states": [
        {
            "tsince": 0.0,
            "position": [7022.46529266, -1400.08296755, 0.03995155],
            "velocity": [1.893841015, 6.405893759, 4.534807250],
        },
        {
            "tsince": 360.0,
            "position": [-7154.03120202, -3783.17682504, -3536.19412294],
            "velocity": [4.741887409, -4.151817765, -2.093935425],
        },
    ],
}

ISS_2019: Dict[str, Any] = {
    "name": "ISS (ZARYA)",
    "norad_id": 25544,
    "line1": "1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991",
    "line2": "2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482",
    "reference_jd": 2458826.5 + 0.8625,
    "position": [-6102.443276428913, -986.3320160255266, -2820.3130707199225],
    "velocity": [-1.4552527284474308, -5.527413826346957, 5.101042055899073],
}

HIGH_ORBIT_SAMPLE: Dict[str, Any] = {
    "name": "HIGH ORBIT SAMPLE",
    "norad_id": 40391,
    "line1": "1 40391U 15007B   15091.99922241 +000KU668 -000BWO3K +0002Z60WH  9994",
    "line2": "2 40391                          +0008XI2O +000FH9Q8 +0001SATC     07",
    "position": [35000000.0, -20000000.0, 5000000.0],
    "velocity": [1500.0, 2600.0, 300.0],
}

REFERENCE_TLES: Dict[str, Dict[str, Any]] = {
    "vanguard_2": VANGUARD_2,
    "iss_2019": ISS_2019,
    "high_orbit_sample": HIGH_ORBIT_SAMPLE,
}
