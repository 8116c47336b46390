#  configuration

from dataclasses import dataclass
from typing import Optional

from .constants import CPU_HZ, TIMER_HZ

FAULT_POLICIES = ("halt", "skip")


@dataclass
class Config:
    scale: int = 10
    cpu_hz: float = CPU_HZ
    timer_hz: float = TIMER_HZ
    on_fault: str = "halt"
    logs: bool = False
    show_hud: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.cpu_hz <= 0 or self.timer_hz <= 0:
            raise ValueError("cpu_hz and timer_hz must be positive")
        if self.on_fault not in FAULT_POLICIES:
            raise ValueError(f"on_fault must be one of {FAULT_POLICIES}, got {self.on_fault!r}")

    @property
    def steps_per_frame(self):
        return self.cpu_hz / self.timer_hz

    @classmethod
    def from_args(cls, args):
        return cls(
            scale=args.scale,
            cpu_hz=args.cpu_hz,
            timer_hz=args.timer_hz,
            on_fault=args.on_fault,
            logs=args.trace,
            show_hud=not args.no_hud,
            seed=args.seed,
        )
