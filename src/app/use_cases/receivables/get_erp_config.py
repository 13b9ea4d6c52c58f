"""GetErpConfig Use Case

Returns the advisory ERP settings. The refresh interval is informational;
nothing polls on it.
"""

from libs.result import Result, Return
from .dtos import ErpConfigDTO


class GetErpConfig:

    def __init__(self, refresh_interval_ms: int = 60000):
        self.refresh_interval_ms = refresh_interval_ms

    async def execute(self) -> Result[ErpConfigDTO]:
        return Return.ok(ErpConfigDTO(refresh_interval_ms=int(self.refresh_interval_ms)))
