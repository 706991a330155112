from estate.models.domain import SigningDomain
from estate.models.offers import Offer, OfferKind, RentOffer, RentWithMintOffer, SaleOffer
from estate.models.records import RedemptionRecord, RentRecord, SaleRecord

__all__ = [
    "Offer",
    "OfferKind",
    "RedemptionRecord",
    "RentOffer",
    "RentRecord",
    "RentWithMintOffer",
    "SaleOffer",
    "SaleRecord",
    "SigningDomain",
]
