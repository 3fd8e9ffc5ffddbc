# 📄 File: hub/modules/accounts/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the account data shapes in one place
# 🧪 Purpose (Technical Summary):
# Package exports for account payloads, projections and conflict reports
# 🔗 Dependencies:
# account.py
# 🔄 Connected Modules / Calls From:
# Account service, account API schemas

from .account import AccountConflictReport, AccountCreate, AccountInfo, AccountUpdate

__all__ = [
    "AccountConflictReport",
    "AccountCreate",
    "AccountInfo",
    "AccountUpdate",
]
