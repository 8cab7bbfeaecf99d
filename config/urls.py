"""
URL configuration for the task points tracker.
"""
from django.urls import path
from ninja import NinjaAPI

from apps.core.handlers import register_exception_handlers
from apps.identity.security import PrincipalAuth

api = NinjaAPI(
    title="Task Points API",
    version="1.0.0",
    description="Complete tasks to earn points, spend points on rewards",
    docs_url="/docs",
    auth=PrincipalAuth(),
)

register_exception_handlers(api)

from apps.identity.api import router as identity_router
from apps.tasks.api import router as tasks_router
from apps.rewards.api import router as rewards_router
from apps.ledger.api import router as ledger_router

api.add_router("/identity/", identity_router)
api.add_router("/tasks/", tasks_router)
api.add_router("/rewards/", rewards_router)
api.add_router("/ledger/", ledger_router)

urlpatterns = [
    path('api/', api.urls),
]
