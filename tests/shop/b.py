from dataclasses import dataclass

from beanerator import beanerate


@beanerate
@dataclass(frozen=True)
class Item:
    sku: str
    count: int
