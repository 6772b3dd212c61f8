"""Headless host loop.

Drives a ``Chip8`` the way a frontend would, without a window: per frame it
executes ``cycles_per_frame`` instructions and then ticks the timers once.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from vip8.errors import ExecutionError
from vip8.logging import build_progress_bar
from vip8.machine import Chip8


@dataclass
class RunReport:
    """Outcome of ``run_frames``.

    Attributes:
        frames: Frames fully completed
        cycles: Instructions executed
        error: The error that stopped the run, if any
        elapsed: Wall-clock seconds spent
    """
    frames: int = 0
    cycles: int = 0
    error: Optional[ExecutionError] = None
    elapsed: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


def run_frames(
    machine: Chip8,
    frames: int,
    cycles_per_frame: int = 10,
    progress: bool = False,
    on_frame: Optional[Callable[[Chip8, int], None]] = None,
) -> RunReport:
    """Run ``frames`` frames of ``cycles_per_frame`` instructions each.

    Args:
        machine: Machine with a ROM loaded
        frames: Number of 60 Hz frames to emulate
        cycles_per_frame: Instructions per frame
        progress: Show a ``tqdm`` progress bar
        on_frame: Called as ``on_frame(machine, frame_index)`` after each frame,
            e.g. to feed key events

    Returns:
        A ``RunReport``; an ``ExecutionError`` stops the run and is reported
        there instead of being raised.
    """
    report = RunReport()
    start = time.time()
    bar = build_progress_bar(frames, desc="Emulating", disable=not progress)
    try:
        for frame in range(frames):
            for _ in range(cycles_per_frame):
                machine.step()
                report.cycles += 1
            machine.tick_timers()
            report.frames += 1
            bar.update(1)
            if on_frame is not None:
                on_frame(machine, frame)
    except ExecutionError as e:
        report.error = e
        machine.logger.warning(f"Stopped after {report.frames} frames, {report.cycles} instructions")
    finally:
        bar.close()
        report.elapsed = time.time() - start

    if report.ok:
        machine.logger.info(
            f"Ran {report.frames} frames ({report.cycles} instructions) in {report.elapsed:.2f}s"
        )
    return report
