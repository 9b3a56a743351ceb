from abc import ABC, abstractmethod


class Page(ABC):
    """Abstract base class for UI pages."""

    # pages that need a signed-in user are skipped by the auth gate in main
    requires_auth: bool = True

    @abstractmethod
    def render(self):
        pass
