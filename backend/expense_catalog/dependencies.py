# Re-export database dependency
from .db import get_db

# Re-export authentication dependencies
from .auth import get_current_user, get_tenant_id, require_admin
