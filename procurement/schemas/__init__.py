from procurement.schemas.envelope import Envelope, ErrorEnvelope
from procurement.schemas.projects import ProjectCreateRequest, ProjectEventRequest, ProjectResponse, ProjectData, ProjectListData
from procurement.schemas.bids import BidCreateRequest, BidResponse, BidData, BidListData, BidAcceptData
from procurement.schemas.ledger import LedgerEntryResponse, LedgerData
