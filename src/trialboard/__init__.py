"""
trialboard - Tuning experiment inspection.

Best metric value per trial, per-second metric histories.
"""

from trialboard.columns import ColumnIndex, assign
from trialboard.matrix import build_experiment_matrix, build_matrix
from trialboard.selector import select
from trialboard.series import build_series, build_trial_series
from trialboard.timestamps import normalize

__version__ = "0.1.0"
__all__ = [
    "ColumnIndex",
    "__version__",
    "assign",
    "build_experiment_matrix",
    "build_matrix",
    "build_series",
    "build_trial_series",
    "normalize",
    "select",
]
