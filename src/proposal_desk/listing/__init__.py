"""Opportunity listing: API record parsing and the local cache."""

from proposal_desk.listing.cache import OpportunityListing
from proposal_desk.listing.parsers import opportunity_from_api

__all__ = ["OpportunityListing", "opportunity_from_api"]
