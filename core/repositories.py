"""
Repository pattern implementation.
Abstracts data access and provides a clean interface for domain services.
"""
from typing import Generic, TypeVar, Optional
from django.db.models import QuerySet, Model

T = TypeVar('T', bound=Model)


class BaseRepository(Generic[T]):
    """
    Base repository for a single model.

    Subclasses set `model` and add domain queries; plain use passes the
    model to the constructor.
    """
    model: type[T] = None

    def __init__(self, model: type[T] = None):
        if model is not None:
            self.model = model

    def get_queryset(self) -> QuerySet[T]:
        return self.model.objects.all()

    def get_by_id(self, id: int, **filters) -> Optional[T]:
        """Get a single instance by ID, with the subclass's related loading"""
        return self.get_queryset().filter(id=id, **filters).first()

    def get_for_update(self, id: int) -> Optional[T]:
        """Get a single instance by ID with a row lock (inside a transaction)"""
        return self.model.objects.select_for_update().filter(id=id).first()

    def delete(self, instance: T) -> None:
        instance.delete()
