"""FakeConfigObserver — records config domain events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConfigLoadedEvent:
    name: str
    version: str


@dataclass(frozen=True)
class TemperatureWarningEvent:
    temperature: float


class FakeConfigObserver:
    def __init__(self) -> None:
        self.loaded: list[ConfigLoadedEvent] = []
        self.temperature_warnings: list[TemperatureWarningEvent] = []

    def config_loaded(self, name: str, version: str) -> None:
        self.loaded.append(ConfigLoadedEvent(name=name, version=version))

    def config_temperature_warning(self, temperature: float) -> None:
        self.temperature_warnings.append(
            TemperatureWarningEvent(temperature=temperature)
        )
