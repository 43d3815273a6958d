from dataclasses import dataclass


@dataclass(slots=True)
class NoticeState:
    """Single user-visible notice; a new notice replaces the previous one."""

    message: str = ""
    kind: str = "info"
    remaining: float = 0.0

    @property
    def visible(self) -> bool:
        return bool(self.message) and self.remaining > 0.0
