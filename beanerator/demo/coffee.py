"""A cup of coffee and its taste."""

from dataclasses import dataclass
from enum import StrEnum

from beanerator import beanerate

__all__ = ["Coffee", "Taste"]


@beanerate
@dataclass(frozen=True)
class Taste:
    flavor: "Taste.Flavor"
    acidity: "Taste.Acidity"
    body: "Taste.Body"

    class Flavor(StrEnum):
        Fruity = "Fruity"
        Floral = "Floral"
        Nutty = "Nutty"
        Chocolatey = "Chocolatey"
        Spicy = "Spicy"
        Earthy = "Earthy"

    class Acidity(StrEnum):
        High = "High"
        Low = "Low"

    class Body(StrEnum):
        Light = "Light"
        Medium = "Medium"
        Full = "Full"


@beanerate
@dataclass(frozen=True)
class Coffee:
    variety: "Coffee.Variety"
    origin: "Coffee.Origin"
    roast: "Coffee.Roast"
    taste: Taste

    class Variety(StrEnum):
        Arabica = "Arabica"
        Robusta = "Robusta"
        Liberica = "Liberica"
        Excelsa = "Excelsa"

    class Origin(StrEnum):
        Ethiopia = "Ethiopia"
        Colombia = "Colombia"
        Brazil = "Brazil"
        Jamaica = "Jamaica"

    class Roast(StrEnum):
        Light = "Light"
        Medium = "Medium"
        Dark = "Dark"
