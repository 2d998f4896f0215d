"""
Catalogue service layer: the global service catalogue and society offerings.
"""

from sevaconnect.services.catalogue.catalogue_service import CatalogueService
from sevaconnect.services.catalogue.offering_resolver import resolve_offering
from sevaconnect.services.catalogue.offering_service import OfferingService

__all__ = [
    "CatalogueService",
    "OfferingService",
    "resolve_offering",
]
