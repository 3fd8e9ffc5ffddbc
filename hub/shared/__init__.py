# 📄 File: hub/shared/__init__.py
# 🧭 Purpose (Layman Explanation):
# Tools shared by every part of the back office: settings, errors, security, database access
# and logging.
# 🧪 Purpose (Technical Summary):
# Shared kernel package initialization.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# Every module
