"""Services for calling provider APIs."""

from saas_connector.services.leadvertex_service import LeadvertexService
from saas_connector.services.moysklad_service import MoyskladService
from saas_connector.services.request_executor import RequestExecutor

__all__ = [
    "LeadvertexService",
    "MoyskladService",
    "RequestExecutor",
]
