"""
Run logger for tracking the progress of a solver execution.

This module provides a hook recording every stage of `Solver.solve`:
- The value produced by each iteration
- Every replacement of the best evaluation
- A final summary

Records are kept in memory and, when an output directory is given, saved as
JSON files under `run_<run_id>/` for later analysis.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from datetime import datetime

from ..core.problem import Evaluation
from ..core.solver import IterHook


logger = logging.getLogger(__name__)


class RunLogger(IterHook):
    """
    Detailed logger for a solver execution.

    Attributes:
        run_id: Run identifier (used for the subdirectory name)
        iterations: One record per iteration
        improvements: One record per replacement of the best evaluation
    """

    def __init__(self, output_dir: Optional[Path] = None, run_id: str = "run"):
        """
        Initialize the run logger.

        Args:
            output_dir: Base output directory; nothing is written when None
            run_id: Run identifier
        """
        self.run_id = run_id
        self.output_dir = Path(output_dir) / f"run_{run_id}" if output_dir is not None else None
        self.iterations: List[Dict[str, Any]] = []
        self.improvements: List[Dict[str, Any]] = []
        self.best_value: Any = None
        self.started_at = datetime.now().isoformat()

        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"RunLogger initialized for run {run_id} at {self.output_dir}")

    def iterated(self, evaluation: Evaluation) -> None:
        if self.best_value is None:
            self.best_value = evaluation.value

        self.iterations.append({
            "iteration": len(self.iterations) + 1,
            "value": self._to_json_value(evaluation.value),
            "timestamp": datetime.now().isoformat(),
        })

    def better_changed(self, old: Evaluation, new: Evaluation) -> None:
        self.best_value = new.value
        self.improvements.append({
            "iteration": len(self.iterations),
            "old_value": self._to_json_value(old.value),
            "new_value": self._to_json_value(new.value),
            "timestamp": datetime.now().isoformat(),
        })
        logger.debug(f"Run {self.run_id}: best value {old.value} -> {new.value}")

    def summary(self) -> Dict[str, Any]:
        """
        Summarize the run.

        Returns:
            Dictionary with run statistics
        """
        return {
            "run_id": self.run_id,
            "started_at": self.started_at,
            "finished_at": datetime.now().isoformat(),
            "total_iterations": len(self.iterations),
            "total_improvements": len(self.improvements),
            "best_value": self._to_json_value(self.best_value),
        }

    def save(self) -> None:
        """Write the iteration records and the summary as JSON files."""
        if self.output_dir is None:
            logger.debug(f"No output directory for run {self.run_id}, nothing saved")
            return

        self._save_json("iterations.json", {
            "run_id": self.run_id,
            "iterations": self.iterations,
            "improvements": self.improvements,
        })
        self._save_json("summary.json", self.summary())
        logger.info(f"Logged run {self.run_id}: {len(self.iterations)} iterations")

    @staticmethod
    def _to_json_value(value: Any) -> Any:
        # numpy scalars expose item()
        return value.item() if hasattr(value, "item") else value

    def _save_json(self, filename: str, data: Dict):
        """
        Save data to a JSON file.

        Args:
            filename: Name of the file
            data: Data to save
        """
        filepath = self.output_dir / filename

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
