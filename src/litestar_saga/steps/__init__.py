"""Step implementations for litestar-saga."""

from __future__ import annotations

from litestar_saga.steps.base import BaseStep, FunctionStep, RunFunc, define_step

__all__ = ["BaseStep", "FunctionStep", "RunFunc", "define_step"]
