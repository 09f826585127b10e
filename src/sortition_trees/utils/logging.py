"""MLFlow experiment logger."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import mlflow


class ExperimentLogger:
    """Thin wrapper around MLFlow for recording simulation runs.

    Can be used as a context manager; the run is closed on exit.
    """

    def __init__(
        self,
        experiment_name: str,
        tracking_uri: str = "mlruns",
        run_name: str | None = None,
    ):
        mlflow.set_tracking_uri(tracking_uri)
        mlflow.set_experiment(experiment_name)
        self.run = mlflow.start_run(run_name=run_name)

    def log_params(self, params: dict[str, Any], prefix: str = "") -> None:
        """Log a (possibly nested) dict of parameters."""
        flat = self._flatten(params, prefix)
        # MLFlow has a 100-param batch limit
        items = list(flat.items())
        for i in range(0, len(items), 100):
            mlflow.log_params(dict(items[i : i + 100]))

    def log_metric(self, key: str, value: float, step: int | None = None) -> None:
        mlflow.log_metric(key, value, step=step)

    def log_metrics(self, metrics: dict[str, float], step: int | None = None) -> None:
        mlflow.log_metrics(metrics, step=step)

    def log_frequencies(self, frequencies: dict[Any, float], prefix: str = "freq") -> None:
        """Log one metric per identifier, e.g. ``freq/100``."""
        mlflow.log_metrics({f"{prefix}/{ident}": float(f) for ident, f in frequencies.items()})

    def log_artifact(self, path: str | Path) -> None:
        mlflow.log_artifact(str(path))

    def end(self, status: str = "FINISHED") -> None:
        mlflow.end_run(status=status)

    def __enter__(self) -> ExperimentLogger:
        return self

    def __exit__(self, exc_type: type | None, *exc_info: object) -> None:
        self.end("FAILED" if exc_type is not None else "FINISHED")

    @staticmethod
    def _flatten(d: dict, prefix: str = "") -> dict[str, str]:
        """Flatten a nested dict into dot-separated keys with string values.

        Lists are flattened by position (``trees.0.k``).
        """
        items: dict[str, str] = {}
        for k, v in d.items():
            key = f"{prefix}.{k}" if prefix else str(k)
            if isinstance(v, dict):
                items.update(ExperimentLogger._flatten(v, key))
            elif isinstance(v, list):
                items.update(ExperimentLogger._flatten(dict(enumerate(v)), key))
            else:
                items[key] = str(v)
        return items
