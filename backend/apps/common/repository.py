from typing import Generic, Iterable, Optional, Sequence, Type, TypeVar

from django.db import models

T = TypeVar('T', bound=models.Model)


class ReadRepository(Generic[T]):
    """Read-only ORM access shared by the catalog repositories."""

    def __init__(self, model: Type[T], *, ordering: Sequence[str] = ()):
        self.model = model
        self.ordering = tuple(ordering)

    def queryset(self) -> models.QuerySet:
        qs = self.model.objects.all()
        return qs.order_by(*self.ordering) if self.ordering else qs

    def get(self, **filters) -> Optional[T]:
        return self.queryset().filter(**filters).first()

    def list(self, **filters) -> Iterable[T]:
        return self.queryset().filter(**filters)

    def count(self, **filters) -> int:
        return self.model.objects.filter(**filters).count()
