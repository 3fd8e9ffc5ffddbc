# 📄 File: hub/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the database connection and the database "conversation" helpers.
# 🧪 Purpose (Technical Summary):
# Exports the engine owner and the session/transaction manager.
# 🔗 Dependencies:
# connection.py, session.py
# 🔄 Connected Modules / Calls From:
# hub.main, hub.shared.core.dependencies

from .connection import DatabaseConnectionManager
from .session import DatabaseSessionManager

__all__ = ["DatabaseConnectionManager", "DatabaseSessionManager"]
