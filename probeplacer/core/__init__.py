from probeplacer.core.hashing import hash_point_set, stable_json_dumps
from probeplacer.core.logging import setup_logging

__all__ = ["hash_point_set", "stable_json_dumps", "setup_logging"]
