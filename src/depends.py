from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories.invoice_remark_repository import SqlAlchemyInvoiceRemarkRepository
from src.adapter.services.priority_invoice_source import PriorityInvoiceSource
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.controllers.dashboard_controller import DashboardController
from src.app.services.invoice_source import InvoiceSource
from src.app.use_cases.receivables import (
    FetchRemarks,
    GetErpConfig,
    LoadDashboardData,
    UpdateRemark,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_invoice_source() -> InvoiceSource:
    return PriorityInvoiceSource(
        url=ApplicationConfig.ERP_API_URL,
        api_key=ApplicationConfig.ERP_API_KEY,
        api_secret=ApplicationConfig.ERP_API_SECRET,
        timeout=ApplicationConfig.ERP_TIMEOUT_SECONDS,
    )


def get_controller(request: Request) -> DashboardController:
    return request.app.state.controller


def get_dashboard_loader(
    session: AsyncSession = Depends(get_session),
    invoice_source: InvoiceSource = Depends(get_invoice_source),
) -> LoadDashboardData:
    return LoadDashboardData(
        invoice_source,
        FetchRemarks(SqlAlchemyInvoiceRemarkRepository(session)),
        GetErpConfig(ApplicationConfig.ERP_REFRESH_INTERVAL_MS),
    )


def get_remark_updater(session: AsyncSession = Depends(get_session)) -> UpdateRemark:
    return UpdateRemark(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRemarkRepository(session),
    )


async def get_loaded_controller(
    controller: DashboardController = Depends(get_controller),
    loader: LoadDashboardData = Depends(get_dashboard_loader),
) -> DashboardController:
    """Controller whose first load has been attempted"""
    await controller.ensure_loaded(loader)
    return controller
