from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        "attempts": 0,
        "dead_ends_braided": 0,
        "loops_added": 0,
        "rooms_carved": 0,
        "room_cells": 0,
        "cells_thinned": 0,
        "width_closures": 0,
        "center_links_opened": 0,
        "door_link_cells": 0,
        "pockets_joined": 0,
        "fallback": False,
        "runtime_ms": 0.0,
    }
