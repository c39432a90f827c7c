"""Shared service instances for the API routers."""
from ..config.settings import get_settings
from ..services.advisor_service import DealAdvisor
from ..services.history_service import HistoryStore

settings = get_settings()

history = HistoryStore(limit=settings.history_limit, csv_path=settings.history_csv)
advisor = DealAdvisor(settings)
