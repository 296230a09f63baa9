from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .utils import _prf_divide, flatten_for_eval, extract_tp_actual_correct
from ..data_processing.index import SpanKey
from ..data_processing.document import RelationRecord


class RelationEvaluator:
    """Compares predicted relation records against gold ones.

    A prediction is correct only when its category and both argument spans
    match a gold relation, with the arguments in the same first/second order.

    Attributes:
        all_true: Gold relation records, one list per document.
        all_outs: Predicted relation records, one list per document.
    """

    def __init__(self, all_true: Sequence[Sequence[RelationRecord]], all_outs: Sequence[Sequence[RelationRecord]]):
        if len(all_true) != len(all_outs):
            raise ValueError(f"Got {len(all_true)} gold documents but {len(all_outs)} predicted ones")
        self.all_true = all_true
        self.all_outs = all_outs

    @staticmethod
    def to_eval_items(relations: Sequence[RelationRecord]) -> List[Tuple[str, SpanKey]]:
        return [(rel.category, SpanKey.from_relation(rel)) for rel in relations]

    def transform_data(self):
        all_true_rel = [self.to_eval_items(rels) for rels in self.all_true]
        all_outs_rel = [self.to_eval_items(rels) for rels in self.all_outs]
        return all_true_rel, all_outs_rel

    @staticmethod
    def compute_prf(y_true, y_pred, average: Optional[str] = "micro") -> Dict:
        """Compute precision, recall and F1.

        Args:
            y_true: Gold items per document, each ``(category, key)``.
            y_pred: Predicted items per document, each ``(category, key)``.
            average: ``"micro"`` aggregates counts over all categories; ``None``
                returns a dict of scores per category.

        Returns:
            ``{"precision", "recall", "f_score"}`` for micro averaging, otherwise
            ``{category: {"precision", "recall", "f_score", "support"}}``.
        """
        y_true, y_pred = flatten_for_eval(y_true, y_pred)
        pred_sum, tp_sum, true_sum, target_names = extract_tp_actual_correct(y_true, y_pred)

        if average == "micro":
            tp_sum = np.array([tp_sum.sum()])
            pred_sum = np.array([pred_sum.sum()])
            true_sum = np.array([true_sum.sum()])
        elif average is not None:
            raise ValueError(f"Unsupported average '{average}', use 'micro' or None")

        warn_for = ["precision", "recall", "f-score"]
        precision = _prf_divide(tp_sum, pred_sum, "precision", "predicted", warn_for)
        recall = _prf_divide(tp_sum, true_sum, "recall", "true", warn_for)

        denominator = precision + recall
        denominator[denominator == 0.0] = 1
        f_score = 2 * (precision * recall) / denominator

        if average == "micro":
            return {"precision": float(precision[0]), "recall": float(recall[0]), "f_score": float(f_score[0])}
        return {
            name: {
                "precision": float(precision[i]),
                "recall": float(recall[i]),
                "f_score": float(f_score[i]),
                "support": int(true_sum[i]),
            }
            for i, name in enumerate(target_names)
        }

    def evaluate(self, average: Optional[str] = "micro"):
        """Evaluate predictions against ground truth.

        Returns:
            Tuple of (output_str, scores) where output_str holds P, R, F1
            percentages and scores is the dict from :meth:`compute_prf`.
        """
        all_true, all_outs = self.transform_data()
        scores = self.compute_prf(all_true, all_outs, average=average)
        if average == "micro":
            output_str = f"P: {scores['precision']:.2%}\tR: {scores['recall']:.2%}\tF1: {scores['f_score']:.2%}\n"
        else:
            output_str = "".join(
                f"{name}\tP: {s['precision']:.2%}\tR: {s['recall']:.2%}\tF1: {s['f_score']:.2%}\tn={s['support']}\n"
                for name, s in scores.items()
            )
        return output_str, scores
