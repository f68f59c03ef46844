from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        "attempts": 0,
        "rejections": {},
        "floor_tiles": 0,
        "reachable_tiles": 0,
        "centers": 0,
        "exit_distance": 0.0,
        "runtime_ms": 0,
        "phase_ms": {},
    }


__all__ = ["init_metrics"]
