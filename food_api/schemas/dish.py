"""
Food API — Dish schema
"""
from pydantic import ConfigDict

from food_api.schemas.common import CamelModel


class Dish(CamelModel):
    """
    A catalog entry. Only the key and the price are interpreted; name,
    description, category and anything else stored is passed through as is,
    and a field the document lacks is left out of the response.
    """

    # Stored prices may be strings; lax mode coerces them to float
    model_config = ConfigDict(extra="allow")

    id: str
    price: float
