"""Machine configuration.

Ambiguous CHIP-8 opcodes behaved differently across interpreters. ``Quirks``
makes each choice explicit and defaults to the original COSMAC VIP:

* ``shift_uses_vy``: 8XY6/8XYE shift VY and store the result in VX.
* ``memory_increments_i``: FX55/FX65 leave I pointing past the last register.
* ``jump_uses_vx``: BXNN jumps to XNN + VX instead of BNNN jumping to NNN + V0.
* ``logic_resets_vf``: 8XY1/8XY2/8XY3 clear VF.

Sprites always wrap at the screen edges.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from vip8.constants import TIMER_HZ
from vip8.errors import ConfigError


@dataclass(frozen=True)
class Quirks:
    """Interpretation of the ambiguous opcodes."""
    shift_uses_vy: bool = True
    memory_increments_i: bool = True
    jump_uses_vx: bool = False
    logic_resets_vf: bool = True

    @classmethod
    def vip(cls) -> "Quirks":
        """COSMAC VIP behavior (the default)."""
        return cls()

    @classmethod
    def modern(cls) -> "Quirks":
        """CHIP-48 / SUPER-CHIP era behavior most modern ROMs expect."""
        return cls(
            shift_uses_vy=False,
            memory_increments_i=False,
            jump_uses_vx=True,
            logic_resets_vf=False,
        )


@dataclass(frozen=True)
class MachineConfig:
    """Host-side settings for running a machine.

    Attributes:
        cycles_per_frame: Instructions executed between two timer ticks
        timer_hz: Timer tick rate, also the frame rate of the host loop
        seed: Seed for the default random source
        log_level: Console logger level
        quirks: Opcode interpretation
    """
    cycles_per_frame: int = 10
    timer_hz: int = TIMER_HZ
    seed: int = 0
    log_level: str = "INFO"
    quirks: Quirks = field(default_factory=Quirks)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "MachineConfig":
        values = dict(values)
        quirk_values = values.pop("quirks", None) or {}
        _check_keys(cls, values, "")
        _check_keys(Quirks, quirk_values, "quirks.")
        try:
            config = cls(quirks=Quirks(**quirk_values), **values)
        except TypeError as e:
            raise ConfigError(str(e)) from e
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def validate(self):
        if not isinstance(self.cycles_per_frame, int) or self.cycles_per_frame < 1:
            raise ConfigError(f"cycles_per_frame must be a positive integer, got {self.cycles_per_frame!r}")
        if not isinstance(self.timer_hz, int) or self.timer_hz < 1:
            raise ConfigError(f"timer_hz must be a positive integer, got {self.timer_hz!r}")
        if str(self.log_level).upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"unknown log_level {self.log_level!r}")
        for quirk in dataclasses.fields(Quirks):
            if not isinstance(getattr(self.quirks, quirk.name), bool):
                raise ConfigError(f"quirks.{quirk.name} must be a boolean")

    @property
    def instruction_frequency(self) -> int:
        """Instructions per second at the configured cadence."""
        return self.cycles_per_frame * self.timer_hz


def _check_keys(cls, values: Dict[str, Any], prefix: str):
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"unknown configuration key(s): {', '.join(prefix + k for k in unknown)}")


def load_config(path: Optional[str] = None, overrides: Iterable[str] = ()) -> MachineConfig:
    """Build a ``MachineConfig`` from defaults, a YAML file and dotlist overrides.

    Args:
        path: Optional YAML file, e.g. ``quirks: {shift_uses_vy: false}``
        overrides: ``key=value`` strings such as ``cycles_per_frame=15`` or
            ``quirks.jump_uses_vx=true``

    Returns:
        The merged, validated configuration
    """
    try:
        merged = OmegaConf.create(MachineConfig().to_dict())
        if path is not None:
            merged = OmegaConf.merge(merged, OmegaConf.load(path))
        overrides = list(overrides)
        if overrides:
            merged = OmegaConf.merge(merged, OmegaConf.from_dotlist(overrides))
        values = OmegaConf.to_container(merged, resolve=True)
    except (OmegaConfBaseException, yaml.YAMLError, OSError) as e:
        raise ConfigError(f"cannot load configuration: {e}") from e
    return MachineConfig.from_dict(values)
