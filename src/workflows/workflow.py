from abc import ABC, abstractmethod
from typing import Any, Dict


class Workflow(ABC):
    """A multi-step action triggered from a page."""

    @abstractmethod
    def run(self, input: Dict[str, Any]) -> Dict[str, Any]:
        pass
