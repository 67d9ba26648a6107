from abc import ABC, abstractmethod


class IMetrics(ABC):
    @abstractmethod
    def record_command(self, command: str, outcome: str) -> None:
        pass

    @abstractmethod
    def record_history_navigation(self, direction: str, applied: bool) -> None:
        pass

    @abstractmethod
    def observe_warnings(self, count: int) -> None:
        pass
