"""
Model Suite
===========

Trains every configured classifier on one standardized mutation-score
feature and serves risk scores, predictions and evaluation reports.

"""

from typing import Any, Dict, Optional, Sequence

import numpy as np
from loguru import logger

from .data import Preprocessor
from .data.validation import check_training_data
from .exceptions import InvalidInputError, NotTrainedError
from .metrics import EvaluationMetrics, EvaluationReport
from .models import BaseModel, ModelFactory
from .models.base import coerce_float
from .utils import Config, ModelAnalyzer


class ModelSuite:
    """Orchestrates preprocessing, training and evaluation of all models."""

    DEFAULT_MODEL = 'logistic_regression'

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize suite.

        Args:
            config: Configuration; defaults to ``Config.default()``
        """
        self.config = config or Config.default()

        scaling = self.config.get_preprocessing_config().get('scaling', 'standard')
        self.preprocessor = Preprocessor(scaling=scaling)

        threshold = self.config.get_evaluation_config().get('threshold', 0.5)
        self.threshold = coerce_float(threshold, 'threshold')
        if not 0.0 <= self.threshold <= 1.0:
            raise InvalidInputError(f"threshold must be within [0, 1], got {self.threshold}")

        self.models: Dict[str, BaseModel] = {
            name: ModelFactory.create_model(name, self.config.get_model_config(name))
            for name in self.config.get_model_names()
        }
        if not self.models:
            raise InvalidInputError("No models configured")

        self.trained = False
        logger.info(f"Initialized suite with models: {', '.join(self.models)}")

    def fit(self, mutation_scores: Sequence[float], labels: Sequence[int]) -> 'ModelSuite':
        """
        Fit the preprocessor on raw scores and train every model.

        Previously trained models are reset first.

        Args:
            mutation_scores: One raw mutation score per training sample
            labels: Binary labels aligned with ``mutation_scores``
        """
        X, y = check_training_data([[score] for score in mutation_scores], labels)

        logger.info("=" * 60)
        logger.info(f"Training {len(self.models)} models on {len(y)} samples")
        logger.info("=" * 60)

        self.trained = False
        self.preprocessor.reset()
        self.preprocessor.fit(X[:, 0])
        features = self.preprocessor.transform(X[:, 0]).reshape(-1, 1)

        for name, model in self.models.items():
            if model.fitted:
                model.reset()
            model.fit(features, y)

        self.trained = True
        logger.info("All models trained")
        return self

    def _check_trained(self) -> None:
        if not self.trained:
            raise NotTrainedError("Models not trained. Call fit() first.")

    def get_model(self, model_name: str) -> BaseModel:
        """Configured model by (case-insensitive) name."""
        resolved = ModelFactory.resolve_model_name(model_name)
        if resolved not in self.models:
            raise InvalidInputError(
                f"Model '{model_name}' is not part of this suite. Available: {list(self.models)}"
            )
        return self.models[resolved]

    def extract_features(self, mutation_scores: Sequence[float]) -> np.ndarray:
        """
        Feature vector for one sample.

        The sample's scores are averaged; a sample without scores takes the
        training mean. The average is rescaled by the fitted preprocessor.

        Returns:
            Array of shape (1,)
        """
        self._check_trained()
        try:
            values = np.array(mutation_scores, dtype=np.float64).reshape(-1)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Mutation scores must be numeric: {exc}") from exc
        value = values.mean() if values.size else self.preprocessor.mean
        return self.preprocessor.transform([value])

    def risk_score(self, mutation_scores: Sequence[float],
                   model_name: str = DEFAULT_MODEL) -> float:
        """
        Probability that a sample is cancerous.

        Models without probability output contribute 1.0 for a positive
        prediction and 0.0 otherwise.
        """
        model = self.get_model(model_name)
        features = self.extract_features(mutation_scores)
        return float(self._risk(model, features.reshape(1, -1))[0])

    @staticmethod
    def _risk(model: BaseModel, X: np.ndarray) -> np.ndarray:
        if model.supports_probability:
            return model.predict_probability(X)
        return model.predict(X).astype(np.float64)

    def predict(self, mutation_scores: Sequence[float],
                model_name: str = DEFAULT_MODEL) -> int:
        """1 if the risk score reaches the configured threshold, else 0."""
        return int(self.risk_score(mutation_scores, model_name) >= self.threshold)

    def evaluate(self, samples: Sequence[Sequence[float]],
                 labels: Sequence[int]) -> Dict[str, EvaluationReport]:
        """
        Evaluate every model on held-out samples.

        Predictions follow ``predict``: a risk score at or above the
        configured threshold counts as positive.

        Args:
            samples: Raw mutation scores of each test sample
            labels: True labels aligned with ``samples``

        Returns:
            Model name -> report
        """
        self._check_trained()
        if len(samples) == 0:
            raise InvalidInputError("Evaluation data is empty")

        X = np.vstack([self.extract_features(sample) for sample in samples])
        logger.info(f"Evaluating {len(self.models)} models on {X.shape[0]} samples")

        reports = {}
        for name, model in self.models.items():
            predictions = (self._risk(model, X) >= self.threshold).astype(np.int64)
            report = EvaluationMetrics.evaluate(labels, predictions)
            EvaluationMetrics.log_report(report, name)
            reports[name] = report

        best_name = max(reports, key=lambda n: reports[n].f1)
        logger.info(f"Best model: {best_name} (F1={reports[best_name].f1:.4f})")
        return reports

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Per-model structural summary."""
        return {name: ModelAnalyzer.describe(model) for name, model in self.models.items()}
