"""
Kontent Graph — Type Resolver Mapping

Maps a content type codename to a zero-argument factory returning an
unbound ContentItem. The mapping is owned by the caller and handed to
DeliveryClient.get_content(); the client invokes the factory once per
raw entry of that type, primary or linked.
"""

from typing import Callable, Dict, Iterator

from kontent_graph.errors import UnknownContentTypeError


class TypeResolvers:

    def __init__(self):
        self._factories: Dict[str, Callable] = {}

    def add_type_resolver(self, codename: str, factory: Callable):
        self._factories[codename] = factory

    def resolve(self, codename: str):
        factory = self._factories.get(codename)

        if factory is None:
            raise UnknownContentTypeError(codename)

        return factory()

    def __contains__(self, codename) -> bool:
        return codename in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def __len__(self) -> int:
        return len(self._factories)
