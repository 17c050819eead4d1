from .asymmetric import router as asymmetric_router
from .auth import router as auth_router
from .guide import router as guide_router
from .notes import router as notes_router
from .signatures import router as signatures_router
from .symmetric import router as symmetric_router

_routers = [
    guide_router,
    auth_router,
    symmetric_router,
    asymmetric_router,
    signatures_router,
    notes_router,
]

__all__ = ["get_routers"]


def get_routers():
    return _routers
