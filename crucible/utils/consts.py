# IN THIS FILE: ALL CONSTANTS (POLICY THRESHOLDS, SERVER, REFERENCE DATA)

# -----------------------------------------------------------------------------
# 1. MOVEMENT POLICIES
# -----------------------------------------------------------------------------
# Lenient policy ("crucible"): may turn after any step, must turn after 3.
CRUCIBLE_MIN_RUN = 1
CRUCIBLE_MAX_RUN = 3

# Strict policy ("ultra crucible"): at least 4 straight steps before turning
# or stopping, and never more than 10.
ULTRA_MIN_RUN = 4
ULTRA_MAX_RUN = 10

DEFAULT_POLICY = "crucible"

# -----------------------------------------------------------------------------
# 2. SERVER
# -----------------------------------------------------------------------------
SERVER_HOST = "0.0.0.0"
SERVER_PORT = 5000
API_URL = f"http://localhost:{SERVER_PORT}/solve"

# -----------------------------------------------------------------------------
# 3. REFERENCE GRID (13x13) AND ITS KNOWN ANSWERS
# -----------------------------------------------------------------------------
REFERENCE_GRID = """\
2413432311323
3215453535623
3255245654254
3446585845452
4546657867536
1438598798454
4457876987766
3637877979653
4654967986887
4564679986453
1224686865563
2546548887735
4322674655533
"""
REFERENCE_CRUCIBLE_COST = 102
REFERENCE_ULTRA_COST = 94
