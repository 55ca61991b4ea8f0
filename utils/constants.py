"""Physical and astronomical constants for the celestial engine.

Angles are in degrees unless suffixed otherwise. Distances use km.
"""

import math

# --- Time ---
MILLIS_PER_DAY: float = 86_400_000.0
DAYS_PER_JULIAN_CENTURY: float = 36525.0
JD_UNIX_EPOCH: float = 2440587.5  # JD of 1970-01-01T00:00:00Z
JD_J2000: float = 2451545.0  # JD of 2000-01-01T12:00:00 TT

# --- Earth ---
R_EARTH_EQUATORIAL: float = 6378.137  # km -- semi-major axis

# --- Sun / Moon ---
AU_KM: float = 149597870.7  # km -- 1 Astronomical Unit
MOON_MEAN_DISTANCE_KM: float = 385001.0

# Largest physically reachable |declination|; anything beyond is a math error.
# The Sun's bound also follows the obliquity of the ecliptic for the epoch.
SUN_MAX_DECLINATION: float = 23.45
SUN_DECLINATION_MARGIN: float = 0.001
MOON_MAX_DECLINATION: float = 28.6

# --- GMST polynomial (degrees) ---
GMST_AT_J2000: float = 280.46061837
GMST_RATE_PER_DAY: float = 360.98564736629
GMST_T2: float = 0.000387933
GMST_T3_DIVISOR: float = 38710000.0

# --- Derived Math Constants ---
DEG_TO_RAD: float = math.pi / 180.0
RAD_TO_DEG: float = 180.0 / math.pi
HOURS_PER_DEGREE: float = 1.0 / 15.0

# Slack allowed on acos/asin arguments for floating point rounding.
TRIG_DOMAIN_EPSILON: float = 1e-9

# --- Sampling defaults ---
DEFAULT_TERMINATOR_STEP_DEG: float = 1.0
MIN_SAMPLING_CADENCE_SECONDS: float = 1.0
MAX_SAMPLING_CADENCE_SECONDS: float = 3600.0
