from devkit.infrastructure.persistence.in_memory_repository import InMemoryRepository
from devkit.infrastructure.persistence.repository import IRepository, Specification
from devkit.infrastructure.persistence.unit_of_work import InMemoryUnitOfWork, IUnitOfWork

__all__ = ["IRepository", "Specification", "InMemoryRepository", "IUnitOfWork", "InMemoryUnitOfWork"]
