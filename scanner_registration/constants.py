"""
Scanner registration constants.

These are HARD CONSTANTS of the matching problem. Runtime-tunable values live in
config/scanner_registration_base.yaml and are validated by
scanner_registration.common.param_models.
"""

# =============================================================================
# MATCHING
# =============================================================================

# Minimum number of shared beacons for two scanners to be considered overlapping.
# A (rotation, displacement) hypothesis is accepted once it collects this many votes.
MIN_OVERLAP = 12

# Smallest overlap that still produces a vote beyond the hypothesised pair itself.
MIN_OVERLAP_FLOOR = 2

# Index of the scanner that defines the global frame.
ORIGIN_SCANNER_INDEX = 0

# =============================================================================
# INPUT BOUNDS
# =============================================================================

# Coordinate magnitude bound (signed 16-bit range).
MAX_ABS_COORDINATE_DEFAULT = 32767

# Work bounds; pairwise voting is roughly cubic in beacons per scanner.
MAX_SCANNERS_DEFAULT = 256
MAX_BEACONS_PER_SCANNER_DEFAULT = 512

# =============================================================================
# INPUT FORMAT
# =============================================================================

SCANNER_HEADER_PREFIX = "---"
COORDINATE_SEPARATOR = ","
