from __future__ import annotations

import os
import random
from typing import Optional

import numpy as np


def set_determinism(seed: int = 42, python_hash_seed: int = 0) -> None:
    """Seed Python `random` and NumPy global RNGs and pin PYTHONHASHSEED.

    Library code takes an explicit generator (see `make_rng`); this only
    covers callers that still reach for the global state.
    """
    os.environ["PYTHONHASHSEED"] = str(python_hash_seed)
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    return np.random.default_rng(seed)
