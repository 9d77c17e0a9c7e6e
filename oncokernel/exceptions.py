"""Exception hierarchy for the classification kernel."""


class OncoKernelError(Exception):
    """Base class for all errors raised by oncokernel."""


class InvalidInputError(OncoKernelError, ValueError):
    """Empty, mismatched or malformed data, or an invalid hyperparameter."""


class NotTrainedError(OncoKernelError, RuntimeError):
    """A prediction was requested from a model that has not been fitted."""


class NotFittedError(OncoKernelError, RuntimeError):
    """A preprocessor transform was requested before ``fit``."""


class AlreadyTrainedError(OncoKernelError, RuntimeError):
    """``fit`` was called on a trained model without a prior ``reset``."""
