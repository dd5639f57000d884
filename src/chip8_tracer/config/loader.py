import warnings
from dataclasses import fields
from typing import Any, Dict

import yaml

from .models import MachineConfig, QuirkConfig

class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def load_from_string(self, text: str) -> MachineConfig:
        return self.parse(yaml.safe_load(text) or {})

    def parse(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Machine config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(MachineConfig)}
        for key in data:
            if key not in known:
                warnings.warn(f"Unknown machine config key '{key}' ignored.")

        defaults = MachineConfig()
        stack_limit = data.get("stack_limit", defaults.stack_limit)
        seed = data.get("seed", defaults.seed)

        config = MachineConfig(
            memory_size=self._parse_int(data.get("memory_size", defaults.memory_size)),
            load_address=self._parse_int(data.get("load_address", defaults.load_address)),
            stack_limit=None if stack_limit is None else self._parse_int(stack_limit),
            cycles_per_frame=self._parse_int(data.get("cycles_per_frame", defaults.cycles_per_frame)),
            timer_hz=self._parse_int(data.get("timer_hz", defaults.timer_hz)),
            seed=None if seed is None else self._parse_int(seed),
            quirks=self._parse_quirks(data.get("quirks") or {}),
        )
        self._validate(config)
        return config

    def _parse_quirks(self, data: Dict[str, Any]) -> QuirkConfig:
        known = {f.name for f in fields(QuirkConfig)}
        for key in data:
            if key not in known:
                warnings.warn(f"Unknown quirk '{key}' ignored.")
        return QuirkConfig(**{k: bool(v) for k, v in data.items() if k in known})

    def _validate(self, config: MachineConfig) -> None:
        if not 0 <= config.load_address < config.memory_size:
            raise ValueError(f"load_address {config.load_address:#x} outside memory of {config.memory_size} bytes")
        if config.stack_limit is not None and config.stack_limit <= 0:
            raise ValueError("stack_limit must be positive or null")
        if config.cycles_per_frame <= 0 or config.timer_hz <= 0:
            raise ValueError("cycles_per_frame and timer_hz must be positive")

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
