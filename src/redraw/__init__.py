"""
redraw
======

Reproducible resampling of tabular data for animated and repeated plots.

This package builds *resampling functions*: objects that take a pandas
DataFrame and return one or more random draws of its rows, tagged with
bookkeeping columns. The same function called twice on the same data
returns the same frame, so a plotting layer can call it once per frame
and still get stable results.

----------------------------------------------------------------------
Workflow
----------------------------------------------------------------------

Core design
-----------
1. Factories (resampler.py):
   - sampler(times, size, replace, group, seed): draws of ``size`` rows,
     with or without replacement.
   - bootstrapper(times, group, seed): draws as many rows as the data
     (or each group) holds, with replacement, and counts copies.

2. Group resolution (data/groups.py):
   - Explicit ``group`` column(s), else an external grouping (call-time
     ``groups`` or a DataFrameGroupBy), else one group of all rows.

3. Draw engine (engine/draw.py):
   - For each draw and group: a truncated permutation (no replacement)
     or independent picks (replacement) from NumPy's global generator.

4. Seed guard (utils/rng.py):
   - Installs a private random baseline for the duration of a call and
     restores the caller's generator state afterwards.

5. Assembly (engine/assemble.py):
   - Copies selected rows and appends ``.draw``, ``.id``,
     ``.original_id``, ``.row`` (and ``.copies`` for bootstraps).

Unified import style
--------------------
Top-level:
  from redraw import sampler, bootstrapper, Resampler, ResampleConfig
  from redraw import ConfigError, SamplingError, InputError
  from redraw import iter_draws, select_draw

Subpackages:
  from redraw.data import Partition, resolve, iter_draws, select_draw, count_draws
  from redraw.engine import draw_indices, assemble, Selection
  from redraw.utils import SeedGuard, preserved_state

Data flow
---------
    df --> Resampler.__call__ --> resolve --> draw_indices --> assemble --> df'

Output columns
--------------
- .draw         1-based draw number
- .id           1-based position within its (draw, group) selection
- .original_id  1-based position of the source row in the input
- .row          1-based position in the whole output
- .copies       bootstrap only: occurrences of .original_id in its
                (draw, group) selection

----------------------------------------------------------------------
"""

import logging

from . import config as config
from . import data as data
from . import engine as engine
from . import utils as utils
from .config import BookkeepingColumns, ResampleConfig
from .data.frames import count_draws, iter_draws, select_draw
from .errors import ConfigError, InputError, ResampleError, SamplingError
from .resampler import Resampler, bootstrapper, sampler

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Factories
    "sampler",
    "bootstrapper",
    "Resampler",
    # Configuration
    "ResampleConfig",
    "BookkeepingColumns",
    # Errors
    "ResampleError",
    "ConfigError",
    "SamplingError",
    "InputError",
    # Frame helpers
    "iter_draws",
    "select_draw",
    "count_draws",
    # Subpackages
    "config",
    "data",
    "engine",
    "utils",
]
