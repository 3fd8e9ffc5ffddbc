# 📄 File: hub/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'hub' folder contains the back-office application code and records its
# version and name.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version metadata for the back-office FastAPI service.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - hub.main (application entry point)
# - pyproject.toml (package discovery)

"""
Stexcore Hub - Back-office REST API

Manages entities (people and organizations) with their emails and phones,
login accounts, role based permissions and authenticated sessions.
"""

__version__ = "1.0.0"
__title__ = "Stexcore Hub API"
__description__ = "Back-office API for entities, accounts and sessions"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
