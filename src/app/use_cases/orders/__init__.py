"""Purchase and order lifecycle use cases"""
from .create_order import CreateOrder
from .update_order_status import UpdateOrderStatus
from .submit_rating import SubmitRating
from .get_order import GetOrder
from .list_orders import ListOrders
from .dtos import (
    CreateOrderCommandDTO,
    UpdateOrderStatusCommandDTO,
    SubmitRatingCommandDTO,
    OrderResponseDTO,
    PurchaseResponseDTO,
    RatingResponseDTO,
    ListOrdersResponseDTO,
    OrderScope,
)

__all__ = [
    "CreateOrder",
    "UpdateOrderStatus",
    "SubmitRating",
    "GetOrder",
    "ListOrders",
    "CreateOrderCommandDTO",
    "UpdateOrderStatusCommandDTO",
    "SubmitRatingCommandDTO",
    "OrderResponseDTO",
    "PurchaseResponseDTO",
    "RatingResponseDTO",
    "ListOrdersResponseDTO",
    "OrderScope",
]
