# hex_terrain/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the hex
terrain generator. These values are used if they are not explicitly provided
by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RUN.
Instead, pass a configuration dictionary to the HexWorld instance.
================================================================================
"""

# --- Noise Field ---
# The terrain noise is a fixed contract: changing any of these values changes
# which biome every cell of the world receives.
NOISE_SEED = 0x62657679
NOISE_FREQUENCY = 0.02
NOISE_OCTAVES = 4
NOISE_LACUNARITY = 2.0
NOISE_PERSISTENCE = 0.1

# Elevation and moisture are read from the same field at asymmetric input
# scalings (and with q/r swapped for moisture) so they are decorrelated.
ELEVATION_SCALE_Q = 2.1654
ELEVATION_SCALE_R = 2.1657
MOISTURE_SCALE = 3.14159
NOISE_OUTPUT_SCALE = 10.0

# --- Biome Thresholds ---
# Empirically chosen boundaries. The order in which biomes.classify_biome
# tests them matters as much as the values.
ELEVATION_WATER_MAX = -0.1
ELEVATION_SHORE_MAX = -0.01
ELEVATION_LOWLAND_MAX = 0.3
ELEVATION_HIGHLAND_MIN = 0.5

# --- Random Source ---
# Fixed 32-byte seed for the "random biome" strategy, so a run is exactly
# reproducible when noise is not used for biome choice.
RANDOM_SEED = (
    1, 0, 52, 0, 0, 0, 0, 0, 1, 0, 10, 0, 22, 32, 0, 0,
    2, 0, 55, 49, 0, 11, 0, 0, 3, 0, 0, 0, 0, 0, 2, 92,
)

# Default biome strategy: 'noise' or 'random'.
BIOME_STRATEGY = 'noise'

# External handles in BiomeTag order. The core only ever selects an index.
BIOME_ASSET_PATHS = (
    "Hexs/sand.glb#Scene0",
    "Hexs/grass.glb#Scene0",
    "Hexs/dirt.glb#Scene0",
    "Hexs/stone.glb#Scene0",
    "Hexs/water.glb#Scene0",
    "Hexs/water-rocks.glb#Scene0",
    "Hexs/water-island.glb#Scene0",
    "Hexs/grass-hill.glb#Scene0",
    "Hexs/grass-forest.glb#Scene0",
)

# --- Generation Governor ---
# Rolling-average frames per second below which growth halts until reset.
FPS_THRESHOLD = 30.0
# Number of frame samples in the rolling average.
FPS_HISTORY_LENGTH = 20

# 'ring' grows the world one ring per healthy frame.
# 'static' spawns a single fixed disk at startup with random biomes.
GENERATION_MODE = 'ring'
STATIC_DISK_RADIUS = 25

# --- Flight Path ---
FLY_ENABLED = False
FLY_SPEED = 10.0 # World units per second
WAYPOINT_COUNT = 100
WAYPOINT_DISK_RADIUS = 200
# Half-open [low, high) ranges for the random draws.
WAYPOINT_SKIP_RANGE = (100, 100000)
WAYPOINT_ELEVATION_RANGE = (0.2, 2.0)
WAYPOINT_ARRIVAL_DISTANCE = 1.0

# --- Viewer Start Positions (x, y, z) ---
# Ring growth starts high above the origin so the world has room to expand.
VIEWER_START_RING = (0.0, 350.0, 100.0)
VIEWER_START_STATIC = (0.0, 15.0, 35.0)

# --- Diagnostics ---
# Slow, fixed reporting cadence (0.2 Hz).
DIAGNOSTICS_INTERVAL_SECONDS = 5.0
