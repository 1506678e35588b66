"""Owner-scoped income/expense ledger: filters, queries, totals and auth."""
from ledger.errors import AuthError, InfrastructureError, LedgerError, NotFound, ValidationError
from ledger.filters import ItemFilter
from ledger.engine import Summary, summarize
