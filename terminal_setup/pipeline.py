from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol, Sequence

from .context import SetupContext

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single sequential setup step."""

    step_id: str
    title: str

    def run(self, ctx: SetupContext) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: SetupContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order; the first exception aborts the run."""

    ran: List[str] = []
    for step in steps:
        logger.info("%s...", step.title)
        logger.debug("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    return PipelineResult(ran_steps=ran)
