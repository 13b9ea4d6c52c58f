"""Invoice Source Interface

Defines the contract for fetching invoices from the ERP.
"""

from abc import ABC, abstractmethod
from typing import List
from libs.result import Result
from src.domain.invoice import Invoice


class InvoiceSource(ABC):
    """
    Abstract source of invoice lines

    Implementations make a single best-effort attempt per call and report
    failures through the Result instead of raising.
    """

    @abstractmethod
    async def fetch_invoices(self) -> Result[List[Invoice]]:
        """
        Fetch the current invoice list

        Returns:
            Result[List[Invoice]]: Normalized invoices or error

        Errors:
            ERP_NOT_CONFIGURED: No endpoint configured
            ERP_FETCH_FAILED: Transport failure or unreadable body
            ERP_HTTP_ERROR: Non-2xx response
            ERP_FORMAT_ERROR: Body lacks the expected invoice list
        """
        pass
