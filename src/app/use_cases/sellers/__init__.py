"""Seller registration and offer use cases"""
from .register_seller import RegisterSeller
from .update_seller_offer import UpdateSellerOffer
from .list_sellers import ListSellers
from .dtos import (
    RegisterSellerCommandDTO,
    UpdateSellerOfferCommandDTO,
    SellerResponseDTO,
    ListSellersResponseDTO,
)

__all__ = [
    "RegisterSeller",
    "UpdateSellerOffer",
    "ListSellers",
    "RegisterSellerCommandDTO",
    "UpdateSellerOfferCommandDTO",
    "SellerResponseDTO",
    "ListSellersResponseDTO",
]
