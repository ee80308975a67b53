from dataclasses import dataclass, field
from typing import Optional


@dataclass
class QueueConfig:
    name: str

    durable: bool
    exclusive: bool
    auto_delete: bool

    actual_queue_name: Optional[str] = field(default=None, init=False)

    def build_name(self) -> str:
        return self.name

    @classmethod
    def work_queue(cls, name: str) -> "QueueConfig":
        """
        Queue shared by producer and worker.

        Both sides must declare it with identical flags or the broker
        rejects the second declaration.
        """
        return cls(name=name, durable=True, exclusive=False, auto_delete=False)
