from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12

# Area epsilon for degenerate triangle checks.
EPS_AREA = 1e-12

# Relative slack applied to the index count of an indexed grid axis so that
# sizes that are exact multiples of the spacing keep their last sample.
EPS_GRID = 1e-9
