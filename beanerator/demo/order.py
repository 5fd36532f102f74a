"""An order of several cups of one coffee."""

from typing import NamedTuple

from beanerator import beanerate
from beanerator.demo.coffee import Coffee


@beanerate
class Order(NamedTuple):
    quantity: int
    coffee: Coffee
