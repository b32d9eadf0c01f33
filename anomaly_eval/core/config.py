"""
Configuration for the anomaly evaluation harness.

Provides environment-aware settings with conservative defaults. Detector
hyperparameters and sweep bounds are configurable to avoid hard-coded
"magic numbers" in the detectors themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DetectorDefaults(BaseModel):
	"""
	Default hyperparameters for the built-in detectors.

	Notes:
	- iqr_k: Tukey fence multiplier (1.5 is the classic box-plot whisker).
	- svm_run_span: extra indices marked after each flagged embedding row.
	- esd_max_anoms: upper bound on the fraction of points ESD may flag.
	- iforest_threshold: score cut above which a point is labelled anomalous.
	"""

	iqr_k: float = Field(1.5, ge=0.0)

	svm_window: int = Field(5, ge=1)
	svm_nu: float = Field(0.1, gt=0.0, le=1.0)
	svm_kernel: Literal["radial", "sigmoid", "polynomial", "linear"] = "radial"
	svm_run_span: int = Field(4, ge=0)

	esd_max_anoms: float = Field(0.1, ge=0.0, le=1.0)
	esd_direction: Literal["positive", "negative", "both"] = "both"
	esd_alpha: float = Field(0.05, gt=0.0, lt=1.0)

	iforest_threshold: float = Field(0.5, ge=0.0, le=1.0)
	iforest_n_estimators: int = Field(100, ge=1)

	random_state: int = 42


class EvaluationConfig(BaseModel):
	"""
	Settings for threshold sweeps.

	max_sweep_iterations bounds the PR-curve sweep so a detector that never
	reaches full recall fails instead of looping forever.
	"""

	sweep_step: float = Field(0.01, gt=0.0)
	max_sweep_iterations: int = Field(1000, ge=1)


class Config(BaseSettings):
	"""
	Global configuration with environment overrides.
	"""

	model_config = SettingsConfigDict(
		env_prefix="ANOMALY_EVAL_",
		env_file=".env",
		env_nested_delimiter="__",
		extra="ignore",
	)

	log_level: str = Field("INFO", description="Default logging level")
	logs_dir: Path = Field(Path("logs"), description="Directory for log files")
	log_to_file: bool = Field(True, description="Also write a rotating log file under logs_dir")
	configure_logging: bool = Field(True, description="Attach handlers to the package logger on import")
	detectors: DetectorDefaults = DetectorDefaults()
	evaluation: EvaluationConfig = EvaluationConfig()

	def model_post_init(self, __context: object) -> None:
		self.logs_dir.mkdir(parents=True, exist_ok=True)


config = Config()
