# 📄 File: hub/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Lists where each part of version 1 of the back-office API lives (entities, accounts, sign-in).
# 🧪 Purpose (Technical Summary):
# API v1 package constants: route prefixes and OpenAPI tags shared by the v1 router aggregation.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# hub.api.v1.router

API_VERSION = "v1"

ROUTE_PREFIXES = {
    "entities": "/entities",
    "accounts": "/accounts",
    "auth": "/auth",
}

API_TAGS = {
    "entities": "Entities",
    "accounts": "Accounts",
    "auth": "Authentication",
    "health": "Health Check",
}

__all__ = ["API_TAGS", "API_VERSION", "ROUTE_PREFIXES"]
