# 📄 File: hub/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Marks the api folder as a package; it holds the versioned routes and the request helpers
# (middleware) that run around every call.
# 🧪 Purpose (Technical Summary):
# Package initialization for the HTTP layer with API prefix constants.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# hub.main

API_PREFIX = "/api"
CURRENT_VERSION = "v1"

__all__ = ["API_PREFIX", "CURRENT_VERSION"]
