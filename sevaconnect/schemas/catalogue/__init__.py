from sevaconnect.schemas.catalogue.offering import OfferingCreate, OfferingUpdate, OfferingView
from sevaconnect.schemas.catalogue.service import ServiceCreate, ServiceResponse, ServiceUpdate

__all__ = [
    "OfferingCreate",
    "OfferingUpdate",
    "OfferingView",
    "ServiceCreate",
    "ServiceResponse",
    "ServiceUpdate",
]
