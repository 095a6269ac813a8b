"""
TLE Codec and Orbit Propagation Package

This package decodes and encodes two-line element sets and propagates them
to arbitrary times.

Modules:
    tle_parser: TLE decoding, encoding and checksum validation
    catalog: Classic, Alpha-5 and Super-5 catalog numbers
    fields: Fixed-width TLE field codecs
    epoch: TLE epoch and Julian Date conversions
    elements: Element set records
    sgp4_propagator: SGP4/SDP4 propagation for ordinary element sets
    high_ephemeris: RK4 propagation for high-orbit state vectors
    lunar_solar: Low-precision lunar and solar positions
    results: Propagation status codes and results
    propagation: Dispatch between the two propagators

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

__version__ = "1.0.0"
