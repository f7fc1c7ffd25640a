"""Rescheduler: Abstract capability to have the host invoke the relayer again."""

from abc import ABC, abstractmethod


class Rescheduler(ABC):
    """Asks a managed host to run the next cycle.

    Only hosted drivers have one; the CLI and the in-process loop do not.
    """

    @abstractmethod
    def reschedule(self, after: float) -> None:
        """Request another invocation.

        :param after: Seconds the next invocation should wait before its cycle.
        """
        pass
