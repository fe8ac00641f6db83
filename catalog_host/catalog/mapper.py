"""Entity to DTO mapping."""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel

from catalog_host.catalog.dtos import CatalogItemDto
from catalog_host.infrastructure.config import settings

TTarget = TypeVar("TTarget")


class Mapper(ABC):
    """Converts a source object into an instance of a target type."""

    @abstractmethod
    def map(self, source: Any, target_type: type[TTarget]) -> TTarget:
        """Map ``source`` onto ``target_type``."""


class CatalogMapper(Mapper):
    """Maps ORM entities onto pydantic DTOs by attribute name.

    Item DTOs also get a ``picture_url`` built from the CDN settings and
    the entity's picture file name.

    Example usage:
        mapper = CatalogMapper()
        dto = mapper.map(item, CatalogItemDto)
    """

    def __init__(self, cdn_host: str | None = None, img_url: str | None = None) -> None:
        """Initialize mapper.

        Args:
            cdn_host: Picture host, defaults to ``settings.cdn_host``.
            img_url: Picture path on the host, defaults to ``settings.img_url``.
        """
        self.cdn_host = (cdn_host if cdn_host is not None else settings.cdn_host).rstrip("/")
        self.img_url = (img_url if img_url is not None else settings.img_url).strip("/")

    def map(self, source: Any, target_type: type[TTarget]) -> TTarget:
        if not (isinstance(target_type, type) and issubclass(target_type, BaseModel)):
            raise TypeError(f"Cannot map to {target_type!r}: not a pydantic model")

        target = target_type.model_validate(source)
        if isinstance(target, CatalogItemDto):
            file_name = getattr(source, "picture_file_name", "") or ""
            target = target.model_copy(update={"picture_url": self.picture_url(file_name)})
        return target

    def picture_url(self, file_name: str) -> str:
        """Build the public URL of an item picture.

        Args:
            file_name: Stored picture file name.

        Returns:
            Full URL, or an empty string when there is no picture.
        """
        if not file_name:
            return ""
        return f"{self.cdn_host}/{self.img_url}/{file_name}"
