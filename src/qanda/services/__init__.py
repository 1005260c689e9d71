"""Services that coordinate the repository and the vote ledger."""

from qanda.services.cascade import CascadeService
from qanda.services.voting import VoteService

__all__ = ["CascadeService", "VoteService"]
