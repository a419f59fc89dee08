from abc import ABC, abstractmethod

from paynotify.models import PaymentRecord, Period


class NotificationRenderer(ABC):
    """Produces the payment notification PDF for one record."""

    def verify(self) -> None:
        """Raise a configuration error if the renderer cannot work at all."""
        pass

    @abstractmethod
    def render(self, record: PaymentRecord, period: Period) -> bytes:
        pass

    def close(self) -> None:
        pass
