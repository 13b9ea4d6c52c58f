"""Unit of Work Interface

Groups repository writes so a use case can commit or roll back as one step.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
