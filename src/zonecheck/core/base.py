"""Abstract base classes defining resolver interfaces."""

from abc import ABC, abstractmethod

from zonecheck.core.models import AnswerRecord, QueryTarget


class BaseResolverClient(ABC):
    """Something that can ask one nameserver one question."""

    @abstractmethod
    async def query(self, target: QueryTarget) -> list[AnswerRecord]:
        """Return the answer section for ``target``, in the order received.

        Raises a ``QueryError`` subclass when no usable answer arrives.
        """
        ...
