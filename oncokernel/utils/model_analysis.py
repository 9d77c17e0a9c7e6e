"""
Model Analysis Utilities
========================

Parameter counting and structural summaries of trained classifiers.

"""

from typing import Any, Dict

from ..models import KNN, DecisionTree, LogisticRegression, NaiveBayes
from ..models.base import BaseModel


class ModelAnalyzer:
    """Analyze model complexity and learned state."""

    @staticmethod
    def count_parameters(model: BaseModel) -> int:
        """
        Count the learned values held by a model.

        Untrained models hold none. For KNN the stored training samples and
        labels are the parameters.
        """
        if not model.fitted:
            return 0

        if isinstance(model, DecisionTree):
            return len(model.nodes)

        if isinstance(model, LogisticRegression):
            return model.weights.size + 1

        if isinstance(model, KNN):
            return model.n_train * (model.n_features + 1)

        if isinstance(model, NaiveBayes):
            # prior plus a mean and std per feature, for each class
            return len(model.classes) * (1 + 2 * model.n_features)

        return 0

    @staticmethod
    def describe(model: BaseModel) -> Dict[str, Any]:
        """Name, hyperparameters, training state and model-specific structure."""
        summary = {
            'model_name': model.model_name,
            'params': model.get_params(),
            'fitted': model.fitted,
            'n_features': model.n_features,
            'n_parameters': ModelAnalyzer.count_parameters(model),
            'supports_probability': model.supports_probability,
        }

        if not model.fitted:
            return summary

        if isinstance(model, DecisionTree):
            summary.update(depth=model.depth, n_leaves=model.n_leaves)
        elif isinstance(model, LogisticRegression):
            summary.update(weights=model.weights.tolist(), bias=model.bias,
                           n_iterations=model.n_iterations)
        elif isinstance(model, KNN):
            summary.update(n_train=model.n_train)
        elif isinstance(model, NaiveBayes):
            summary.update(classes=model.classes, class_prior=model.class_prior)

        return summary
