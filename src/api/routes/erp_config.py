from fastapi import APIRouter, Depends
from config import ApplicationConfig
from src.api.error import ClientError
from src.app.use_cases.receivables.dtos import ErpConfigDTO
from src.app.use_cases.receivables.get_erp_config import GetErpConfig

router = APIRouter(prefix="/config", tags=["Config"])


def get_erp_config_use_case() -> GetErpConfig:
    return GetErpConfig(ApplicationConfig.ERP_REFRESH_INTERVAL_MS)


@router.get("/erp", response_model=ErpConfigDTO)
async def get_erp_config(use_case: GetErpConfig = Depends(get_erp_config_use_case)):
    """Advisory ERP settings (refresh interval)"""
    result = await use_case.execute()
    if result.is_err():
        raise ClientError(result.error)
    return result.value
