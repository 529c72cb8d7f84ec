from typing import Any, Dict, Optional


class ModuleBasesError(RuntimeError):
    """
    Base class for errors raised by the basis and support algorithms.

    Every failure here is a defect in the data supplied by the caller, so the
    errors carry the offending witness in ``context`` and are never recovered.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [context: {ctx_str}]"
        return self.message


class PreconditionViolation(ModuleBasesError):
    """The caller asked for something outside the algorithm's assumptions."""


class LogicInconsistency(ModuleBasesError):
    """A maximality or spanning witness supplied by the caller is contradicted."""

    @property
    def witness(self) -> Any:
        return self.context.get("witness")

    @property
    def extension(self) -> Any:
        return self.context.get("extension")


class NotFinite(LogicInconsistency):
    """A finite spanning set was claimed for a module with an infinite basis."""
