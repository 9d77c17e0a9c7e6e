"""
Evaluation Metrics
==================

Confusion matrix, accuracy, precision, recall and F1 for binary labels,
with 0.0 for any ratio whose denominator is zero.

"""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from loguru import logger

from ..data.validation import check_label_pair
from ..exceptions import InvalidInputError


@dataclass(frozen=True)
class ConfusionMatrix:
    """Outcome counts of binary predictions against ground truth."""
    true_positive: int = 0
    true_negative: int = 0
    false_positive: int = 0
    false_negative: int = 0

    @property
    def total(self) -> int:
        return self.true_positive + self.true_negative + self.false_positive + self.false_negative

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_table(self) -> List[List[int]]:
        """Rows are actual (negative, positive), columns predicted (negative, positive)."""
        return [
            [self.true_negative, self.false_positive],
            [self.false_negative, self.true_positive],
        ]


@dataclass(frozen=True)
class EvaluationReport:
    accuracy: float
    precision: float
    recall: float
    f1: float
    confusion_matrix: ConfusionMatrix

    def as_dict(self) -> Dict[str, Any]:
        return {
            'accuracy': self.accuracy,
            'precision': self.precision,
            'recall': self.recall,
            'f1': self.f1,
            'confusion_matrix': self.confusion_matrix.as_dict(),
        }


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


class EvaluationMetrics:
    """
    Binary classification metrics computed from first principles.

    Every score whose denominator is zero evaluates to 0.0 instead of
    raising, so the metrics are total over well-formed label vectors.
    """

    @staticmethod
    def confusion_matrix(y_true: Any, y_pred: Any) -> ConfusionMatrix:
        """
        Tally TP/TN/FP/FN over aligned label vectors.

        Raises:
            InvalidInputError: If lengths differ or a label is not 0 or 1
        """
        truth, predicted = check_label_pair(y_true, y_pred)
        return ConfusionMatrix(
            true_positive=int(((truth == 1) & (predicted == 1)).sum()),
            true_negative=int(((truth == 0) & (predicted == 0)).sum()),
            false_positive=int(((truth == 0) & (predicted == 1)).sum()),
            false_negative=int(((truth == 1) & (predicted == 0)).sum()),
        )

    @staticmethod
    def accuracy_from(cm: ConfusionMatrix) -> float:
        return _ratio(cm.true_positive + cm.true_negative, cm.total)

    @staticmethod
    def precision_from(cm: ConfusionMatrix) -> float:
        return _ratio(cm.true_positive, cm.true_positive + cm.false_positive)

    @staticmethod
    def recall_from(cm: ConfusionMatrix) -> float:
        return _ratio(cm.true_positive, cm.true_positive + cm.false_negative)

    @staticmethod
    def f1_from(cm: ConfusionMatrix) -> float:
        precision = EvaluationMetrics.precision_from(cm)
        recall = EvaluationMetrics.recall_from(cm)
        return _ratio(2.0 * precision * recall, precision + recall)

    @staticmethod
    def accuracy(y_true: Any, y_pred: Any) -> float:
        """(TP + TN) / total."""
        return EvaluationMetrics.accuracy_from(EvaluationMetrics.confusion_matrix(y_true, y_pred))

    @staticmethod
    def precision(y_true: Any, y_pred: Any) -> float:
        """TP / (TP + FP)."""
        return EvaluationMetrics.precision_from(EvaluationMetrics.confusion_matrix(y_true, y_pred))

    @staticmethod
    def recall(y_true: Any, y_pred: Any) -> float:
        """TP / (TP + FN)."""
        return EvaluationMetrics.recall_from(EvaluationMetrics.confusion_matrix(y_true, y_pred))

    @staticmethod
    def f1_score(y_true: Any, y_pred: Any) -> float:
        """Harmonic mean of precision and recall."""
        return EvaluationMetrics.f1_from(EvaluationMetrics.confusion_matrix(y_true, y_pred))

    # Define once, use everywhere
    METRICS: Dict[str, Callable[[ConfusionMatrix], float]] = {
        'accuracy': accuracy_from.__func__,
        'precision': precision_from.__func__,
        'recall': recall_from.__func__,
        'f1': f1_from.__func__,
    }

    @staticmethod
    def get_scores(metrics_names: Optional[Union[str, List[str]]],
                   y_true: Any, y_pred: Any) -> Union[Dict[str, float], float]:
        """
        Compute named scores.

        Args:
            metrics_names: Metric name or names; None computes all of them
            y_true: True labels
            y_pred: Predicted labels

        Returns:
            Single score for a single name, dict of scores otherwise

        Examples:
            >>> EvaluationMetrics.get_scores('accuracy', [1, 0], [1, 1])
            0.5
        """
        is_single_metric = isinstance(metrics_names, str)
        names = ([metrics_names] if is_single_metric
                 else list(metrics_names) if metrics_names is not None
                 else list(EvaluationMetrics.METRICS))

        for name in names:
            if name not in EvaluationMetrics.METRICS:
                raise InvalidInputError(
                    f"Metric '{name}' not found. Available metrics: {list(EvaluationMetrics.METRICS)}"
                )

        cm = EvaluationMetrics.confusion_matrix(y_true, y_pred)
        results = {name: EvaluationMetrics.METRICS[name](cm) for name in names}

        if is_single_metric:
            return results[metrics_names]
        return results

    @staticmethod
    def evaluate(y_true: Any, y_pred: Any) -> EvaluationReport:
        """All scores plus the confusion matrix in one pass."""
        cm = EvaluationMetrics.confusion_matrix(y_true, y_pred)
        return EvaluationReport(
            accuracy=EvaluationMetrics.accuracy_from(cm),
            precision=EvaluationMetrics.precision_from(cm),
            recall=EvaluationMetrics.recall_from(cm),
            f1=EvaluationMetrics.f1_from(cm),
            confusion_matrix=cm,
        )

    @staticmethod
    def format_report(report: EvaluationReport) -> str:
        """Render scores and the 2x2 confusion matrix as a text block."""
        cm = report.confusion_matrix
        lines = [
            "=== Evaluation Metrics ===",
            f"Accuracy:  {report.accuracy:.4f} ({report.accuracy * 100:.2f}%)",
            f"Precision: {report.precision:.4f} ({report.precision * 100:.2f}%)",
            f"Recall:    {report.recall:.4f} ({report.recall * 100:.2f}%)",
            f"F1-Score:  {report.f1:.4f}",
            "",
            "=== Confusion Matrix ===",
            f"{'':>16}{'Predicted':^20}",
            f"{'':>16}{'Negative':>10}{'Positive':>10}",
            f"{'Actual Negative':>16}{cm.true_negative:>10}{cm.false_positive:>10}",
            f"{'Actual Positive':>16}{cm.false_negative:>10}{cm.true_positive:>10}",
        ]
        return '\n'.join(lines)

    @staticmethod
    def log_report(report: EvaluationReport, name: Optional[str] = None) -> None:
        """Emit a report through the logger, one line per row."""
        if name:
            logger.info(f"--- {name} ---")
        for line in EvaluationMetrics.format_report(report).splitlines():
            logger.info(line)
