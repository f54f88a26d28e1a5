from .health import health_bp
from .rosters import roster_bp
from .audit_logs import audit_bp
