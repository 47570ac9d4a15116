"""History domain - audit trail of mutating actions"""

from .router import router
from .service import HistoryRecorder

__all__ = ["router", "HistoryRecorder"]
