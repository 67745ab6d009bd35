from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'lattice_cells': 0,
        'connectors_carved': 0,
        'backtracks': 0,
        'max_stack_depth': 0,
        'open_cells': 0,
        'dead_ends': 0,
        'attempts': 0,
        'runtime_ms': 0.0,
    }
