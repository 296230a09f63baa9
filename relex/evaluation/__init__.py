from .evaluator import RelationEvaluator
from .utils import UndefinedMetricWarning
