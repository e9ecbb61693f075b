"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from legislature_api.models.bill import Bill, BillCommitteeAssignment, BillCosponsor, BillVote, Committee
from legislature_api.models.legislator import Legislator
from legislature_api.models.representative import HouseDistrict, Representative, SenateSeat
from legislature_api.models.state import State

__all__ = [
    "Bill",
    "BillCommitteeAssignment",
    "BillCosponsor",
    "BillVote",
    "Committee",
    "HouseDistrict",
    "Legislator",
    "Representative",
    "SenateSeat",
    "State",
]
