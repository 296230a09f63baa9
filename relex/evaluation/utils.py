import warnings
from typing import Dict, Sequence, Set, Tuple, Union

import numpy as np


class UndefinedMetricWarning(UserWarning):
    pass


def flatten_for_eval(y_true, y_pred):
    """Tag every item with the index of its document so matches stay per-document."""
    tagged_true = [(*item, doc_idx) for doc_idx, items in enumerate(y_true) for item in items]
    tagged_pred = [(*item, doc_idx) for doc_idx, items in enumerate(y_pred) for item in items]
    return tagged_true, tagged_pred


def _group_by_category(items) -> Dict[str, Set[Tuple]]:
    groups: Dict[str, Set[Tuple]] = {}
    for category, key, doc_idx in items:
        groups.setdefault(category, set()).add((key, doc_idx))
    return groups


def extract_tp_actual_correct(y_true, y_pred):
    """Count true positives, predictions and gold items per relation category.

    Items are ``(category, key, doc_idx)`` triples as produced by
    :func:`flatten_for_eval`.

    Returns:
        Tuple of (pred_sum, tp_sum, true_sum, target_names), the counts being
        numpy arrays aligned with the sorted category names.
    """
    gold = _group_by_category(y_true)
    predicted = _group_by_category(y_pred)
    target_names = sorted(gold.keys() | predicted.keys())

    empty = set()
    tp_sum = np.array([len(gold.get(name, empty) & predicted.get(name, empty)) for name in target_names], dtype=np.int64)
    pred_sum = np.array([len(predicted.get(name, empty)) for name in target_names], dtype=np.int64)
    true_sum = np.array([len(gold.get(name, empty)) for name in target_names], dtype=np.int64)
    return pred_sum, tp_sum, true_sum, target_names


def _prf_divide(
    numerator: np.ndarray,
    denominator: np.ndarray,
    metric: str,
    modifier: str,
    warn_for: Sequence[str],
    zero_division: Union[str, int] = "warn",
) -> np.ndarray:
    """Element-wise ratio where empty denominators give ``zero_division`` (0 with a warning by default)."""
    numerator = np.asarray(numerator, dtype=np.float64)
    denominator = np.asarray(denominator, dtype=np.float64)
    empty = denominator == 0

    result = np.zeros_like(numerator)
    np.divide(numerator, denominator, out=result, where=~empty)
    if zero_division not in ("warn", 0):
        result[empty] = 1.0

    if empty.any() and zero_division == "warn" and metric in warn_for:
        _warn_prf(modifier, f"{metric.title()} is", len(result))
    return result


def _warn_prf(modifier: str, msg_start: str, result_size: int):
    if result_size == 1:
        msg = f"{msg_start} ill-defined and being set to 0.0 due to no {modifier} relations."
    else:
        msg = f"{msg_start} ill-defined and being set to 0.0 in categories with no {modifier} relations."
    warnings.warn(msg + " Use `zero_division` parameter to control this behavior.", UndefinedMetricWarning, stacklevel=3)
