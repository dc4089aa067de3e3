"""Client facades."""

from .delivery_client import DeliveryClient

__all__ = ["DeliveryClient"]
