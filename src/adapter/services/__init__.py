from .unit_of_work import SqlAlchemyUnitOfWork
from .payment_gateway import AsaasPaymentGateway

__all__ = [
    "SqlAlchemyUnitOfWork",
    "AsaasPaymentGateway",
]
