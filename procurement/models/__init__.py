# Importing this package registers every mapped table on Base.metadata.
from procurement.models.project import Project
from procurement.models.bid import Bid
from procurement.models.contract_ledger import ContractLedgerEntry

__all__ = ["Project", "Bid", "ContractLedgerEntry"]
